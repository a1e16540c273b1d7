from pathlib import Path
from typing import Annotated, List, Literal

from pydantic import SecretStr, field_validator
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

    PROJECT_NAME: str = 'Cinema Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # Booking store backend: 'memory' for local development, 'redis' for shared deployments
    BOOKING_STORE_BACKEND: Literal['memory', 'redis'] = 'memory'

    # Redis Configuration
    REDIS_HOST: str = 'localhost'
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ''
    REDIS_KEY_PREFIX: str = ''
    REDIS_POOL_MAX_CONNECTIONS: int = 50
    REDIS_POOL_SOCKET_TIMEOUT: int = 10  # Socket read/write timeout (seconds)
    REDIS_POOL_SOCKET_CONNECT_TIMEOUT: int = 10  # Connection timeout (seconds)
    REDIS_POOL_HEALTH_CHECK_INTERVAL: int = 30  # Health check interval (seconds)

    # Seating layout used when a booking session is started
    SEAT_ROWS: Annotated[List[str], NoDecode] = ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H']
    SEATS_PER_ROW: int = 10

    @field_validator('SEAT_ROWS', mode='before')
    @classmethod
    def assemble_seat_rows(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip().upper() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H']

    # Booking session housekeeping
    BOOKING_SESSION_TTL_MINUTES: int = 30


settings = Settings()  # type: ignore
