"""
Celebrity Penpal - Authentication Utilities
Password hashing, bearer tokens, and auth dependencies.

A token is issued on register/login and stored on the user row; a request
is authenticated by finding the user whose stored token equals the bearer
token exactly, then checking the token's signature (and expiry if enabled).
Logging in again replaces the stored token.
"""
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import bcrypt
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from .config import Settings
from .database import get_db
from .errors import AuthenticationError
from .models.db_models import UserDB

ALGORITHM = "HS256"

# Bearer token security; missing headers are handled per-route
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password_bytes, salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')
    hashed_bytes = hashed_password.encode('utf-8')
    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        return False


def create_access_token(user_id: int, email: str, settings: Settings) -> str:
    """Create a signed token. Carries an exp claim only when expiry is enabled."""
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "jti": uuid4().hex,
    }
    if settings.token_expire_hours > 0:
        to_encode["exp"] = datetime.utcnow() + timedelta(hours=settings.token_expire_hours)
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings) -> Optional[dict]:
    """Decode and validate a token. Expired or tampered tokens return None."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None


def issue_token(user: UserDB, settings: Settings) -> str:
    """Create a new token and store it on the user (not committed)."""
    token = create_access_token(user.id, user.email, settings)
    user.token = token
    return token


def resolve_token(db: Session, token: Optional[str], settings: Settings) -> Optional[UserDB]:
    """Look up the user owning `token`. Read-only."""
    if not token:
        return None

    user = db.query(UserDB).filter(UserDB.token == token).first()
    if user is None:
        return None

    payload = decode_token(token, settings)
    if payload is None or payload.get("sub") != str(user.id):
        return None

    return user


# =============================================================================
# FASTAPI DEPENDENCIES
# =============================================================================

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[UserDB]:
    """Resolve the caller if a valid bearer token is present, else None."""
    if credentials is None:
        return None
    return resolve_token(db, credentials.credentials, settings)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserDB:
    """Dependency to get the current authenticated user."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    user = resolve_token(db, credentials.credentials, settings)
    if user is None:
        raise AuthenticationError("Invalid token")

    return user
