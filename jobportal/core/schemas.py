from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, model_serializer

T = TypeVar("T")


class Pagination(BaseModel):
    page: int
    limit: int
    pages: int


class ApiResponse(BaseModel, Generic[T]):
    """
    Standard response envelope: {success, data?, message?, count?, total?, pagination?}.
    Top-level keys left as None are dropped on serialization.
    """
    success: bool = True
    message: Optional[str] = None
    count: Optional[int] = None
    total: Optional[int] = None
    pagination: Optional[Pagination] = None
    data: Optional[T] = None

    @model_serializer(mode="wrap")
    def _drop_empty_envelope_keys(self, handler):
        # Only top-level keys; None values inside `data` are kept
        return {k: v for k, v in handler(self).items() if v is not None}

    @classmethod
    def ok(cls, data: T = None, message: Optional[str] = None, **extra) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message, **extra)


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
