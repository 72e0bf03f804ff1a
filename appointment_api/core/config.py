from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os

from .. import __version__


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Appointment API"
    VERSION: str = __version__
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 4040

    # Database
    MONGO_URI: str = "mongodb://127.0.0.1:27017"
    DB_NAME: str = "todo"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Client bundle served at /
    STATIC_DIR: str = "Frontend/public"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


# Create settings instance
settings = Settings()
