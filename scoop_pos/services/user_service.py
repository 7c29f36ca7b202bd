"""User service operations."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from scoop_pos.core.config import settings
from scoop_pos.models.user import User, normalize_user_role

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def create_user(
    db: Session,
    username: str,
    hashed_password: str,
    role: str,
    full_name: str | None = None,
) -> User:
    user = User(
        username=username,
        password_hash=hashed_password,
        role=normalize_user_role(role),
        full_name=full_name,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def ensure_admin_user(db: Session, hashed_password: str | None) -> bool:
    """Create the configured admin account when missing.

    Returns True when an account was created.
    """
    if not settings.admin_user or hashed_password is None:
        return False
    if get_user_by_username(db, settings.admin_user) is not None:
        return False
    create_user(db, username=settings.admin_user, hashed_password=hashed_password, role="ADMIN")
    logger.warning("[BOOTSTRAP] Admin account %s created from ADMIN_USER/ADMIN_PASS.", settings.admin_user)
    return True
