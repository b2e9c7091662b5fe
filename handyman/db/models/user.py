# handyman/db/models/user.py
from datetime import timedelta

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import validates

from handyman.db.base import Base
from handyman.utils.auth import hash_password, normalize_email, verify_password
from handyman.utils.time import utcnow

ROLES = ("user", "provider", "admin")

RECENT_ACTIVITY_WINDOW = timedelta(days=7)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user", server_default="user")

    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    profile_photo_url = Column(String, nullable=True)

    # only populated for providers; always replaced as a whole, never mutated in place
    provider_profile = Column(JSON, nullable=True)

    is_verified = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    failed_login_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(DateTime, nullable=True)

    last_activity = Column(DateTime, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, plaintext: str):
        # the only place a hash is derived, so unrelated updates never rehash
        self.password_hash = hash_password(plaintext)

    def check_password(self, plaintext: str) -> bool:
        return verify_password(plaintext, self.password_hash)

    @validates("email")
    def _normalize_email(self, key, value):
        return normalize_email(value) if value else value

    @validates("role")
    def _validate_role(self, key, value):
        if value not in ROLES:
            raise ValueError(f"Invalid role '{value}'")
        return value

    def is_recently_active(self, now=None) -> bool:
        if self.last_activity is None:
            return False
        return self.last_activity > (now or utcnow()) - RECENT_ACTIVITY_WINDOW

    def is_locked(self, now=None) -> bool:
        return self.locked_until is not None and self.locked_until > (now or utcnow())
