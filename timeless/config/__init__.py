"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Database
    # ======================
    DATABASE_URL: str = "sqlite+aiosqlite:///./timeless.db"
    AUTO_CREATE_TABLES: bool = True

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # ======================
    # Store
    # ======================
    # "sql" keeps both collections in DATABASE_URL, "memory" keeps them in-process
    STORE_BACKEND: str = "sql"

    # ======================
    # Board
    # ======================
    DEFAULT_BASE_PRICE: float = 1000.0
    SCHEDULER_ENABLED: bool = True
    BOARD_REFRESH_SECONDS: int = 1

    # ======================
    # Timezone
    # ======================
    # Zone used to read and render datetime-local values from the admin console
    TIMEZONE: str = "UTC"

    # ======================
    # Logging
    # ======================
    LOG_FILE: Optional[str] = None
    LOG_MAX_BYTES: int = 10_485_760
    LOG_BACKUP_COUNT: int = 5

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
