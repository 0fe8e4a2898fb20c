"""
Celebrity Penpal - Authentication Router
Handles user registration, login and session verification.
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import hash_password, verify_password, issue_token, get_current_user, get_settings
from ..config import Settings
from ..database import get_db
from ..errors import AuthenticationError, ConflictError, MissingFieldError
from ..models.db_models import UserDB

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class RegisterRequest(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    display_name: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    success: bool = True
    user_id: int
    token: str
    email: str
    display_name: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    email: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("/register", response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Register a new user account and sign them in.
    """
    if not request.email or not request.password:
        raise MissingFieldError("Email and password required")

    if db.query(UserDB).filter(UserDB.email == request.email).first():
        raise ConflictError("Email already registered")

    user = UserDB(
        email=request.email,
        password_hash=hash_password(request.password),
        display_name=request.display_name or request.email.split("@")[0],
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")

    token = issue_token(user, settings)
    db.commit()

    logger.info(f"User registered: {user.email}")
    return AuthResponse(
        user_id=user.id,
        token=token,
        email=user.email,
        display_name=user.display_name,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Authenticate user and issue a fresh token.
    """
    if not request.email or not request.password:
        raise MissingFieldError("Email and password required")

    user = db.query(UserDB).filter(UserDB.email == request.email).first()
    if not user or not verify_password(request.password, user.password_hash):
        raise AuthenticationError("Invalid credentials")

    token = issue_token(user, settings)
    db.commit()

    logger.info(f"User logged in: {user.email}")
    return AuthResponse(
        user_id=user.id,
        token=token,
        email=user.email,
        display_name=user.display_name,
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserDB = Depends(get_current_user)):
    """
    Get current authenticated user info.
    """
    return UserResponse(
        id=current_user.id,
        email=current_user.email,
        display_name=current_user.display_name,
        bio=current_user.bio,
        avatar_url=current_user.avatar_url,
    )
