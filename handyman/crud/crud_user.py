import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from handyman.core import provider_status
from handyman.core.config import settings
from handyman.db.models.user import User
from handyman.schemas.provider import ProviderApplication, ProviderProfile
from handyman.schemas.user import UserUpdate
from handyman.utils.auth import normalize_email
from handyman.utils.time import utcnow

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "email", "phone", "address", "city", "profile_photo_url")


class CRUDUser:
    def get(self, db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    def create(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        password: str,
        role: str = "user",
        phone: Optional[str] = None,
        address: Optional[str] = None,
        provider_profile: Optional[ProviderProfile] = None,
    ) -> User:
        db_user = User(
            name=name,
            email=email,
            password=password,
            role=role,
            phone=phone,
            address=address,
            provider_profile=provider_profile.to_document() if provider_profile else None,
            last_activity=utcnow(),
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        logger.info("Created user %s with role %s", db_user.id, db_user.role)
        return db_user

    def update_profile(self, db: Session, db_user: User, update: UserUpdate) -> User:
        """Apply the truthy fields of ``update``; absent or empty values leave the field as is."""
        for field in PROFILE_FIELDS:
            value = getattr(update, field)
            if value:
                setattr(db_user, field, value)
        db.commit()
        db.refresh(db_user)
        return db_user

    def become_provider(self, db: Session, db_user: User, application: ProviderApplication) -> User:
        """Switch the user to the provider role with a freshly submitted profile.

        Repeated calls keep the role but always restart verification.
        """
        previous = provider_status.current_state(db_user.provider_profile)
        profile = provider_status.submit(application)

        db_user.role = "provider"
        db_user.provider_profile = profile.to_document()
        db_user.is_verified = False
        db_user.last_activity = utcnow()
        db.commit()
        db.refresh(db_user)
        logger.info("User %s submitted provider profile (%s -> pending)", db_user.id, previous)
        return db_user

    def decide_provider(self, db: Session, db_user: User, event: str) -> User:
        profile = provider_status.transition(db_user.provider_profile, event)
        db_user.provider_profile = profile.to_document()
        db_user.is_verified = profile.is_verified
        db.commit()
        db.refresh(db_user)
        logger.info("Provider %s -> %s", db_user.id, profile.status)
        return db_user

    def set_active(self, db: Session, db_user: User, active: bool) -> User:
        db_user.is_active = active
        db.commit()
        db.refresh(db_user)
        return db_user

    def record_failed_login(self, db: Session, db_user: User) -> None:
        db_user.failed_login_attempts = (db_user.failed_login_attempts or 0) + 1
        if db_user.failed_login_attempts >= settings.MAX_LOGIN_ATTEMPTS:
            db_user.locked_until = utcnow() + timedelta(minutes=settings.LOGIN_LOCKOUT_MINUTES)
            db_user.failed_login_attempts = 0
            logger.warning("Locked account %s after repeated failed logins", db_user.id)
        db.commit()

    def record_successful_login(self, db: Session, db_user: User) -> None:
        db_user.failed_login_attempts = 0
        db_user.locked_until = None
        db_user.last_activity = utcnow()
        db.commit()
        db.refresh(db_user)


users = CRUDUser()
