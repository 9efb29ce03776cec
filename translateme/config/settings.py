"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ClearPolicy(str, Enum):
    """How the displayed history is updated after a clear request."""
    RECONCILE = "reconcile"
    OPTIMISTIC = "optimistic"


class TranslationProviderSettings(BaseSettings):
    """Remote translation lookup configuration"""

    base_url: str = Field(default="https://api.mymemory.translated.net/get")
    # None disables the timeout entirely; a hung lookup only blocks its own request.
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    contact_email: Optional[str] = Field(
        default=None,
        description="Sent as the 'de' parameter to raise the provider's daily quota"
    )

    model_config = {
        "env_prefix": "TRANSLATION_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class HistoryStoreSettings(BaseSettings):
    """Translation history document store configuration"""

    database_url: str = Field(default="sqlite+aiosqlite:///./translateme.db")
    batch_delete: bool = Field(
        default=True,
        description="Delete the whole history in one transaction instead of one record at a time"
    )
    clear_policy: ClearPolicy = Field(default=ClearPolicy.RECONCILE)
    echo_sql: bool = Field(default=False)

    @field_validator('clear_policy', mode='before')
    @classmethod
    def normalize_clear_policy(cls, v):
        if isinstance(v, str):
            return ClearPolicy(v.lower())
        return v

    model_config = {
        "env_prefix": "HISTORY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="TranslateMe Backend")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="'json' or 'text'")

    # Nested Settings
    translation: TranslationProviderSettings = Field(default_factory=TranslationProviderSettings)
    history: HistoryStoreSettings = Field(default_factory=HistoryStoreSettings)

    def __init__(self, **values):
        # Nested groups are separate settings sources; hand them the same env file.
        if "_env_file" in values:
            env_file = values["_env_file"]
            values.setdefault("translation", TranslationProviderSettings(_env_file=env_file))
            values.setdefault("history", HistoryStoreSettings(_env_file=env_file))
        super().__init__(**values)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings

