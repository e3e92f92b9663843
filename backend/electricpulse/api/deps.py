"""
FastAPI dependency injection helpers.
The authenticated User is the request's session context; RBAC builds on it.
"""
from typing import Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.core.logging import get_logger
from electricpulse.models.user import User, UserRole
from electricpulse.services.auth_service import AuthService

log = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_UNAUTHORIZED_HEADERS,
        )
    user = AuthService(db).get_user_from_token(credentials.credentials)
    if not user:
        log.info("token_rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=_UNAUTHORIZED_HEADERS,
        )
    return user


def require_roles(*roles: str):
    """Dependency factory: 403 unless the caller holds one of ``roles``."""
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            log.info("access_denied", user_id=str(current_user.id), role=current_user.role)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {', '.join(roles)}",
            )
        return current_user
    return checker


require_admin = require_roles(UserRole.ADMIN)
