import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from handyman.core.security import create_access_token, get_current_user
from handyman.crud.crud_user import users
from handyman.db.base import get_db
from handyman.db.models.user import User
from handyman.schemas.provider import ProviderApplication
from handyman.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    ProviderResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

# same text for unknown email and wrong password so the response does not reveal registered emails
INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    if users.get_by_email(db, payload.email):
        raise HTTPException(status_code=400, detail="User with this email already exists")

    # a provider role requested here gets no provider profile until POST /provider
    new_user = users.create(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        phone=payload.phone,
        address=payload.address,
    )
    return AuthResponse(token=create_access_token(new_user), user=UserResponse.model_validate(new_user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = users.get_by_email(db, payload.email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=INVALID_CREDENTIALS)

    if user.is_locked():
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many failed login attempts, try again later",
        )

    if not user.check_password(payload.password):
        users.record_failed_login(db, user)
        if user.is_locked():
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many failed login attempts, try again later",
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated")

    users.record_successful_login(db, user)
    return AuthResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.get("/profile", response_model=ProfileResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return ProfileResponse(user=UserResponse.model_validate(current_user))


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if payload.email and payload.email.lower() != current_user.email:
        if users.get_by_email(db, payload.email):
            raise HTTPException(status_code=400, detail="User with this email already exists")

    updated = users.update_profile(db, current_user, payload)
    return ProfileResponse(user=UserResponse.model_validate(updated))


@router.post("/provider", response_model=ProviderResponse)
def become_provider(
    payload: Optional[ProviderApplication] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # a bodiless request applies with an all-default profile
    updated = users.become_provider(db, current_user, payload or ProviderApplication())
    return ProviderResponse(
        message="Successfully registered as a provider",
        user=UserResponse.model_validate(updated),
    )
