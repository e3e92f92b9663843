"""Authentication endpoints"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.services.auth_service import AuthService
from electricpulse.schemas.user import (
    UserCreate,
    UserResponse,
    TokenPair,
    LoginRequest,
    RefreshRequest,
)
from electricpulse.middleware.rate_limit import limiter, AUTH_LIMIT
from electricpulse.models.audit_log import AuditLog
from electricpulse.api.deps import get_current_user
from electricpulse.models.user import User

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    data: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    """Create the first account. It is always an admin; later accounts go through /users."""
    svc = AuthService(db)
    if svc.user_count() > 0:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Registration is closed; ask an administrator for an account",
        )

    data.role = "admin"
    try:
        user = svc.create_user(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    db.add(
        AuditLog(
            user_id=user.id,
            action="user_registered",
            resource_type="user",
            resource_id=str(user.id),
            ip_address=request.client.host if request.client else None,
        )
    )
    db.commit()
    return user


@router.post("/login", response_model=TokenPair)
@limiter.limit(AUTH_LIMIT)
def login(
    data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    svc = AuthService(db)
    user = svc.authenticate(data.email, data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    db.add(
        AuditLog(
            user_id=user.id,
            action="user_login",
            resource_type="user",
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    )
    db.commit()

    return svc.create_tokens(user)


@router.post("/refresh", response_model=TokenPair)
def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    tokens = AuthService(db).refresh_tokens(data.refresh_token)
    if not tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
    return tokens


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
