from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from app.database.connection import get_db
from app.dependencies.auth import require_auth
from app.models.user import User
from app.schemas.user import LoginRequest, RefreshRequest, Token, UserCreate, UserResponse
from app.core.security import (
    create_access_token,
    decode_refresh_token,
    create_refresh_token
)
from app.services.user_service import authenticate, create_user, get_user

router = APIRouter(prefix="/auth", tags=["Auth"])


def _issue_tokens(user: User) -> dict:
    claims = {"sub": user.id, "role": user.role}
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "access_token": create_access_token(claims),
        "refresh_token": create_refresh_token(claims),
        "token_type": "bearer",
    }


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register_user(data: UserCreate, db: Session = Depends(get_db)):
    user = create_user(db, data.email, data.password, role=data.role)
    return _issue_tokens(user)


@router.post("/login", response_model=Token)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate(db, data.email, data.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _issue_tokens(user)


@router.post("/token", response_model=Token)
def login_form(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # OAuth2 password flow; the username field carries the email
    user = authenticate(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _issue_tokens(user)


@router.post("/refresh", response_model=Token)
def refresh_token(data: RefreshRequest, db: Session = Depends(get_db)):
    payload = decode_refresh_token(data.refresh_token)

    if not payload.user_id:
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

    user = get_user(db, payload.user_id)
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

    return _issue_tokens(user)


@router.get("/me", response_model=UserResponse)
def whoami(user: User = Depends(require_auth)):
    return user
