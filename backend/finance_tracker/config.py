"""
Application settings loaded from the environment and an optional .env file.
"""
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """
    Runtime configuration. Field names map to upper-case environment variables
    (database_url -> DATABASE_URL).
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./finance_tracker.db"

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7
    bcrypt_rounds: int = 10

    cors_allow_origins: str = ""
    frontend_url: str = ""

    auto_create_tables: bool = True
    api_docs_enabled: bool = False
    log_level: str = "INFO"

    def get_cors_origins(self) -> List[str]:
        """
        Determine allowed CORS origins.

        If CORS_ALLOW_ORIGINS is not set, FRONTEND_URL is used.
        """
        origins = [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]
        if origins:
            return origins
        if self.frontend_url:
            return [self.frontend_url]
        return ["http://localhost:5173"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
