from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from handyman.schemas.provider import ProviderProfile

Role = Literal["user", "provider", "admin"]


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    # admins are only created from the admin API
    role: Literal["user", "provider"] = "user"
    phone: Optional[str] = None
    address: Optional[str] = None


class AdminUserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    role: Role = "user"
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    profile_photo_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("*", mode="before")
    @classmethod
    def _blank_as_unset(cls, value):
        # falsy values never clear a field
        return value or None


class UserResponse(BaseModel):
    """Public projection of a user; never carries the password hash."""

    id: int
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    profile_photo_url: Optional[str] = None
    is_verified: bool = False
    is_active: bool = True
    provider_profile: Optional[ProviderProfile] = None
    last_activity: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

    @model_validator(mode="after")
    def _hide_provider_profile(self):
        if self.role != "provider":
            self.provider_profile = None
        return self


class AdminUserItem(UserResponse):
    is_recently_active: bool = False

    @model_validator(mode="before")
    @classmethod
    def _recent_activity(cls, data):
        if hasattr(data, "is_recently_active") and callable(data.is_recently_active):
            return {
                **{field: getattr(data, field) for field in UserResponse.model_fields},
                "is_recently_active": data.is_recently_active(),
            }
        return data


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    user: UserResponse


class ProviderResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse


class AdminUserCreateResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse
