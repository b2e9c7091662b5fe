from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "Handyman Services API"

    # Database URL (any SQLAlchemy URL)
    DATABASE_URL: str = "sqlite:///./handyman.db"

    # JWT configuration (provide a fallback for local development)
    SECRET_KEY: str = "fallback_secret_for_dev_only"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30

    BCRYPT_ROUNDS: int = 10

    # Login lockout
    MAX_LOGIN_ATTEMPTS: int = 5
    LOGIN_LOCKOUT_MINUTES: int = 15

    # When enabled, /api/admin and /api/services require an admin bearer token
    ADMIN_AUTH_REQUIRED: bool = False

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://localhost:5173",
        "http://localhost:8081",
    ]

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True


settings = Settings()
