"""Authentication and user management service"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from electricpulse.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from electricpulse.models.user import User
from electricpulse.schemas.user import UserCreate, UserUpdate, TokenPair
from electricpulse.core.logging import get_logger

log = get_logger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def user_count(self) -> int:
        return self.db.execute(select(func.count()).select_from(User)).scalar() or 0

    def list_users(self) -> list[User]:
        return list(self.db.execute(select(User).order_by(User.created_at)).scalars().all())

    def create_user(self, data: UserCreate) -> User:
        existing = self.db.execute(
            select(User).where(User.email == data.email)
        ).scalar_one_or_none()

        if existing:
            raise ValueError("Email already registered")

        user = User(
            email=data.email,
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
            role=data.role,
            customer_id=data.customer_id,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        log.info("user_created", email=data.email, role=data.role)
        return user

    def update_user(self, user: User, data: UserUpdate) -> User:
        for field, value in data.model_dump(exclude_none=True).items():
            setattr(user, field, value)
        self.db.commit()
        self.db.refresh(user)
        log.info("user_updated", user_id=str(user.id))
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.db.execute(
            select(User).where(User.email == email, User.is_active == True)
        ).scalar_one_or_none()

        if not user or not verify_password(password, user.hashed_password):
            log.info("login_failed", email=email)
            return None

        user.last_login = datetime.now(timezone.utc)
        self.db.commit()
        return user

    def create_tokens(self, user: User) -> TokenPair:
        access = create_access_token(str(user.id), user.role)
        refresh = create_refresh_token(str(user.id))
        return TokenPair(access_token=access, refresh_token=refresh)

    def refresh_tokens(self, refresh_token: str) -> Optional[TokenPair]:
        payload = decode_token(refresh_token)
        if not payload or payload.get("type") != "refresh":
            return None

        user = self._active_user(payload.get("sub"))
        if not user:
            return None
        return self.create_tokens(user)

    def get_user_from_token(self, token: str) -> Optional[User]:
        payload = decode_token(token)
        if not payload or payload.get("type") != "access":
            return None
        return self._active_user(payload.get("sub"))

    def _active_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        try:
            uid = uuid.UUID(user_id)
        except ValueError:
            return None
        user = self.db.get(User, uid)
        if not user or not user.is_active:
            return None
        return user
