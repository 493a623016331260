from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ResumeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    original_name: str
    path: str
    size: int
    mimetype: str
    is_active: bool
    uploaded_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "uploaded_at"),
    )
