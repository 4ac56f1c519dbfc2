from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

DEFAULT_DATABASE_PATH = "waitlist.db"
DEFAULT_PORT = 8080


class Settings(BaseSettings):
    # Database - SQLite file path, ":memory:" or a "file:" URI
    DATABASE_PATH: str = DEFAULT_DATABASE_PATH

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = DEFAULT_PORT

    # Signup form served at "/", relative to the working directory
    INDEX_FILE: str = "index.html"

    # App Settings
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = []

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("DATABASE_PATH", mode="before")
    @classmethod
    def _default_database_path(cls, value):
        # An exported-but-empty variable means "use the default"
        return value or DEFAULT_DATABASE_PATH

    @field_validator("PORT", mode="before")
    @classmethod
    def _default_port(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_PORT
        return value


def get_settings() -> Settings:
    """Read settings fresh from the environment."""
    return Settings()
