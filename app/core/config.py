"""Application configuration via environment variables."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Staff Retreat"
    debug: bool = False
    log_dir: Path = Path.home() / ".logs" / "retreat"

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Spreadsheet endpoint (Apps Script web app URL)
    sheet_url: str = ""
    sheet_timeout_seconds: float | None = 15.0

    # Refresh settings
    refresh_interval_minutes: int = 5  # 0 disables the background refresh

    # Page variant
    show_not_going: bool = False
    show_map: bool = True
    location_mode: Literal["city_state", "free_text"] = "city_state"


settings = Settings()
