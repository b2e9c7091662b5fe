from passlib.context import CryptContext

from handyman.core.config import settings

# Cost factor is fixed per deployment; hashes carry their own rounds so changing it
# only affects newly hashed passwords.
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password is required")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True when ``plain_password`` matches the stored hash.

    A mismatch is a plain False; only missing arguments raise.
    """
    if plain_password is None or not hashed_password:
        raise ValueError("password and hash are required")
    return pwd_context.verify(plain_password, hashed_password)


def normalize_email(email: str) -> str:
    """Return the stored form of an email address (trimmed, lowercased).

    Emails are compared in this form, so uniqueness is case-insensitive.
    """
    return email.strip().lower()
