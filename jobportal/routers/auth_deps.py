"""
Authentication and role dependencies for FastAPI endpoints.
Ownership checks live in jobportal.core.policy.
"""
import logging
from typing import Callable, List, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobportal.core.exceptions import AccessDeniedError, AuthenticationError
from jobportal.database import get_db
from jobportal.models.user import User, UserRole
from jobportal.services import auth as auth_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Extracts and validates the current user from the bearer token.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    payload = auth_service.decode_access_token(credentials.credentials)

    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        raise AuthenticationError()

    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        raise AuthenticationError("Token expired")

    if payload.get("type") != "access":
        logger.warning("Authentication failed: Invalid token type")
        raise AuthenticationError()

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        logger.warning("Authentication failed: Missing subject in token")
        raise AuthenticationError()

    user = db.get(User, user_id)
    if user is None or not user.is_active:
        logger.warning(f"Authentication failed: User {user_id} not found or inactive")
        raise AuthenticationError()
    return user


def require_role(allowed_roles: List[UserRole]) -> Callable:
    """
    Dependency factory that checks if the user has one of the allowed roles.

    Usage:
        @router.post("/jobs")
        def create_job(user: User = Depends(require_role([UserRole.EMPLOYER]))):
            ...
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise AccessDeniedError(
                f"User role {current_user.role.value} is not authorized to access this route"
            )
        return current_user
    return role_checker


require_employer = require_role([UserRole.EMPLOYER])
