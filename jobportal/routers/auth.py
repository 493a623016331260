import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.core.exceptions import AuthenticationError, InvalidInputError
from jobportal.core.schemas import ApiResponse
from jobportal.database import get_db
from jobportal.models.user import User, UserRole
from jobportal.routers.auth_deps import get_current_user
from jobportal.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from jobportal.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    if data.role == UserRole.ADMIN:
        raise InvalidInputError("Admin accounts cannot be self-registered")

    email = data.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise InvalidInputError("User already exists")

    user = User(
        name=data.name,
        email=email,
        hashed_password=auth_service.get_password_hash(data.password),
        role=data.role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError("User already exists")
    db.refresh(user)

    logger.info("User registered", extra={"user_id": user.id, "role": user.role.value})
    return AuthResponse(token=auth_service.token_for_user(user), user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == login_data.email.lower()).first()
    if not user or not auth_service.verify_password(login_data.password, user.hashed_password):
        logger.warning("Failed login", extra={"reason": "invalid_credentials"})
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        raise AuthenticationError("User is inactive")

    return AuthResponse(token=auth_service.token_for_user(user), user=UserResponse.model_validate(user))


@router.get("/me", response_model=ApiResponse[UserResponse])
def get_me(current_user: User = Depends(get_current_user)):
    return ApiResponse.ok(data=UserResponse.model_validate(current_user))
