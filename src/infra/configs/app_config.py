# infra/configs/app_config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class AppSettings(BaseSettings):
    """Application settings, read from ``ENGINE_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    app_name: str = "API Test Execution Engine"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Repository settings
    data_dir: str = "data"

    # Execution settings
    request_timeout: float = 30.0
    script_timeout: float = 10.0
    script_max_memory: Optional[int] = None
    default_environment: str = "default"
    strict_resolution: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


# Global settings instance
settings = AppSettings()
