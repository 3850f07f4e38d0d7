from typing import NamedTuple, Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.database.connection import get_db
from app.core.security import decode_access_token
from app.enums.user_roles import UserRole
from app.models.user import User
from app.models.vendor import Vendor
from app.services.user_service import get_user
from app.services.vendor_service import get_vendor_by_api_key, get_vendor_for_user

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


class ActingVendor(NamedTuple):
    vendor: Vendor
    via_api_key: bool


def _user_from_token(db: Session, token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    token_data = decode_access_token(token)
    if not token_data.user_id:
        return None
    return get_user(db, token_data.user_id)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = _user_from_token(db, token)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return user


def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    user = _user_from_token(db, token)
    if user and user.is_active:
        return user
    return None


def require_auth(user: User = Depends(get_current_user)) -> User:
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.admin.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return user


def require_vendor_user(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.vendor.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Vendor privileges required",
        )
    return user


def get_acting_vendor(
    x_api_key: Optional[str] = Header(default=None),
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> ActingVendor:
    """
    Vendor performing a catalog write, identified by X-API-Key or by a
    vendor-role bearer token.
    """
    if x_api_key:
        vendor = get_vendor_by_api_key(db, x_api_key)
        if not vendor:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
        return ActingVendor(vendor, True)

    user = _user_from_token(db, token)
    if not user or user.role != UserRole.vendor.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Vendor privileges required",
        )
    vendor = get_vendor_for_user(db, user.id)
    if not vendor:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Vendor profile not found")
    return ActingVendor(vendor, False)
