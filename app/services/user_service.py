import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.security import get_password_hash, verify_password
from app.enums.user_roles import UserRole
from app.models.user import User
from app.utils.ids import generate_id

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def create_user(db: Session, email: str, password: str, role: str = "buyer") -> User:
    email = email.lower()
    if get_user_by_email(db, email):
        raise HTTPException(status_code=409, detail="User already exists")

    user = User(
        id=generate_id("USR"),
        email=email,
        hashed_password=get_password_hash(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("user %s registered as %s", user.id, user.role)
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def ensure_admin_user(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if user:
        if user.role != UserRole.admin.value:
            user.role = UserRole.admin.value
            db.commit()
            db.refresh(user)
        return user
    return create_user(db, email, password, role=UserRole.admin.value)
