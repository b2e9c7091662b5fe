import logging
from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from handyman.core.config import settings
from handyman.db.base import get_db
from handyman.db.models.user import User
from handyman.utils.time import utcnow

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

TOKEN_CLAIMS = ("id", "email", "role")


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a bearer token carrying only the user's id, email and role."""
    expire = utcnow() + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    claims = {"id": user.id, "email": user.email, "role": user.role, "exp": expire}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if payload.get("id") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {claim: payload.get(claim) for claim in TOKEN_CLAIMS}


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = decode_access_token(token)

    # role and profile may have changed since the token was issued; the row is the source of truth
    user = db.get(User, claims["id"])
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin only")
    return current_user


def admin_guard(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Optional[User]:
    """Router-level guard for the admin surface.

    Admin routes are open unless ADMIN_AUTH_REQUIRED is set, in which case an
    admin bearer token is required.
    """
    if not settings.ADMIN_AUTH_REQUIRED:
        return None
    return require_admin(get_current_user(token, db))
