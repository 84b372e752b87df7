from pathlib import Path
from typing import Annotated, List, Optional

import orjson
from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Cinema Reservation'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    ALGORITHM: str = 'HS256'

    # CORS, comma separated or a JSON array
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return orjson.loads(v)
        elif isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL (used when POSTGRES_SERVER is set)
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'cinema_reservation'

    # Embedded store (SQLite) used otherwise
    SQLITE_PATH: str = str(_PROJECT_ROOT / 'cinema_reservation.db')

    DATABASE_URL_ASYNC: str = ''

    # Connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    AUTO_CREATE_TABLES: bool = True

    @model_validator(mode='after')
    def assemble_database_url(self) -> 'Settings':
        if self.DATABASE_URL_ASYNC:
            return self
        if self.POSTGRES_SERVER:
            self.DATABASE_URL_ASYNC = (
                f'postgresql+asyncpg://{self.POSTGRES_USER}:'
                f'{self.POSTGRES_PASSWORD.get_secret_value()}@{self.POSTGRES_SERVER}:'
                f'{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
            )
        else:
            self.DATABASE_URL_ASYNC = f'sqlite+aiosqlite:///{self.SQLITE_PATH}'
        return self

    # Reservation rules
    BOOKING_HOLD_WINDOW_MINUTES: int = 15
    MAX_SEATS_PER_BOOKING: int = 12
    CANCELLATION_CUTOFF_MINUTES: int = 60

    # Expiry sweeper
    ENABLE_EXPIRY_SWEEPER: bool = True
    EXPIRY_SWEEP_INTERVAL_SECONDS: float = 1800

    # Seat lock manager
    SEAT_LOCK_TIMEOUT_SECONDS: float = 5.0
    SEAT_LOCK_SHARDS: int = 256


settings = Settings()  # type: ignore
