from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # 🎯 Application
    APP_NAME: str = "SeriLovers API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440

    # 🌐 Server
    HOST: str = '0.0.0.0'
    PORT: int = 8000

    # 🗄️ Database
    DATABASE_URL: str
    DB_ECHO: bool = False

    # 🔴 Redis (event bus)
    REDIS_URL: str = "redis://localhost:6379/0"
    EVENTS_ENABLED: bool = True
    EVENTS_CHANNEL_PREFIX: str = "serilovers"
    EVENT_PUBLISH_TIMEOUT: float = 10.0
    EVENT_PUBLISH_RETRIES: int = 2

    # 🔒 CORS
    ALLOWED_ORIGINS: str = "*"

    # 🔐 Admin Account
    FIRST_SUPERUSER_EMAIL: Optional[str] = None
    FIRST_SUPERUSER_PASSWORD: Optional[str] = None

    # 📺 Ratings
    MIN_RATING_SCORE: int = 1
    MAX_RATING_SCORE: int = 10

    # 📊 Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = 'ignore'

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(',')]

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite"""
        return self.DATABASE_URL.startswith("sqlite")

settings = Settings()
