"""User management endpoints (admin only)"""
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from electricpulse.core.database import get_db
from electricpulse.api.deps import require_admin
from electricpulse.models.audit_log import AuditLog
from electricpulse.models.user import User
from electricpulse.schemas.user import UserResponse, UserUpdate, UserCreate
from electricpulse.services.auth_service import AuthService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return AuthService(db).list_users()


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    data: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        user = AuthService(db).create_user(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    db.add(
        AuditLog(
            user_id=current_user.id,
            action="user_created",
            resource_type="user",
            resource_id=str(user.id),
            details={"email": user.email, "role": user.role},
            ip_address=request.client.host if request.client else None,
        )
    )
    db.commit()
    return user


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: uuid.UUID,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.id == current_user.id and data.is_active is False:
        raise HTTPException(status_code=400, detail="Cannot deactivate your own account")

    user = AuthService(db).update_user(user, data)
    db.add(
        AuditLog(
            user_id=current_user.id,
            action="user_updated",
            resource_type="user",
            resource_id=str(user.id),
            details=data.model_dump(exclude_none=True),
        )
    )
    db.commit()
    return user
