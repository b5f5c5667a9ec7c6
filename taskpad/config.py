"""Configuration settings using Pydantic BaseSettings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASKPAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    storage_path: Path = Field(default=Path("data/taskpad.json"), description="JSON file holding persisted state")
    tasks_key: str = Field(default="task-manager-tasks-v2", description="Storage key for the task collection")
    theme_key: str = Field(default="task-manager-theme-v1", description="Storage key for the theme preference")
    seed_demo_tasks: bool = Field(default=True, description="Start with demo tasks when nothing is stored")

    # Application Configuration
    app_host: str = Field(default="127.0.0.1", description="FastAPI host")
    app_port: int = Field(default=8000, description="FastAPI port")
    debug: bool = Field(default=False, description="Enable debug mode")
    environment: str = Field(default="development", description="Deployment environment name")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Optional[Path] = Field(default=None, description="Directory for rotating log files")
