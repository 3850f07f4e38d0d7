from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # DB
    DATABASE_URL: str = "sqlite:///./marketplace.db"

    # Security / JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30

    # Bootstrap admin, created at startup when both are set
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    # Pricing / commissions
    DEFAULT_COMMISSION_RATE: float = 0.1
    TRUST_CLIENT_PRICES: bool = False
    ALLOW_PAYMENT_SIMULATION: bool = True

    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_MS: float = 500.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
