"""Configuration Manager for the property survey app."""
from typing import Optional

from pydantic_settings import BaseSettings

PLACEHOLDER_SUBMISSION_URL = 'YOUR_GOOGLE_SCRIPT_WEB_APP_URL'


class ConfigManager(BaseSettings):
    """Manages application configuration settings using Pydantic BaseSettings."""

    # Spreadsheet endpoint (Apps Script web app URL)
    submission_url: str = PLACEHOLDER_SUBMISSION_URL
    submission_timeout: Optional[float] = None  # None leaves the request unbounded

    # Photo preview settings
    photo_thumbnail_size: int = 100  # Maximum thumbnail dimension in pixels

    # GPS settings
    location_permission_required: bool = True

    class Config:
        env_prefix = 'SURVEY_'
        case_sensitive = False

    def get(self, key, default=None):
        """Get a configuration value."""
        return getattr(self, key, default)

    def set(self, key, value):
        """Set a configuration value."""
        setattr(self, key, value)

    def get_all(self):
        """Get all configuration values as dictionary."""
        return self.model_dump()
