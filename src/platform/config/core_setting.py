from pathlib import Path
from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Turf Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security (tokens are issued by the identity provider, only verified here)
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    AUTH_COOKIE_NAME: str = 'turfauth'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'turf_booking'
    POSTGRES_PORT: int = 5432

    # Optional read replica (falls back to primary)
    POSTGRES_REPLICA_SERVER: Optional[str] = None
    POSTGRES_REPLICA_PORT: Optional[int] = None

    # Connection pool
    DB_POOL_SIZE_WRITE: int = 10
    DB_POOL_SIZE_READ: int = 20
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30  # seconds
    DB_POOL_RECYCLE: int = 3600  # seconds
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    @property
    def DATABASE_READ_URL_ASYNC(self) -> str:
        if not self.POSTGRES_REPLICA_SERVER:
            return self.DATABASE_URL_ASYNC
        password = self.POSTGRES_PASSWORD.get_secret_value()
        port = self.POSTGRES_REPLICA_PORT or self.POSTGRES_PORT
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_REPLICA_SERVER}:{port}/{self.POSTGRES_DB}'

    # Booking rules
    VENUE_TIMEZONE: str = 'Asia/Kolkata'
    CANCELLATION_CUTOFF_MINUTES: int = 60
    RECONCILE_GRACE_SECONDS: int = 300  # never touch reservations younger than this

    # Notifications (SMTP disabled when host is empty -> log only)
    SMTP_HOST: str = ''
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ''
    SMTP_PASSWORD: SecretStr = SecretStr('')
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: int = 10  # seconds
    EMAIL_SENDER: str = 'no-reply@turfbooking.local'


settings = Settings()  # type: ignore
