"""Application configuration."""

import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Remote habit service
    habit_api_url: str = os.getenv("HABIT_API_URL", "https://habit-track.up.railway.app")
    habit_api_timeout: float = float(os.getenv("HABIT_API_TIMEOUT", "10"))

    # Local durable storage
    storage_path: str = os.getenv("STORAGE_PATH", "data/habits.db")

    # Theme used when neither the remote service nor local storage has one
    system_theme: str = os.getenv("SYSTEM_THEME", "light")

    # Push the loaded collection back through the save protocol at startup
    sync_on_load: bool = os.getenv("SYNC_ON_LOAD", "true").lower() in ("1", "true", "yes")

    # Server
    server_host: str = os.getenv("SERVER_HOST", "0.0.0.0")
    server_port: int = int(os.getenv("SERVER_PORT", "8000"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False


settings = Settings()
