"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from .ledger import Ledger, accept_any_account_number, pattern_validator


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LedgerConfig(BaseSettings):
    """Bank ledger configuration"""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Business rules configuration
    enforce_unique_account_numbers: bool = True
    account_number_pattern: Optional[str] = None  # None accepts every number

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8090

    # CLI configuration
    bank_name: str = "Advanced Bank"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return fmt


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config


def build_ledger(settings: Optional[LedgerConfig] = None) -> Ledger:
    """
    Create an empty Ledger wired to the configured business rules

    Args:
        settings: Configuration to use, the global instance if omitted

    Returns:
        New Ledger instance
    """
    settings = settings or get_config()

    if settings.account_number_pattern:
        validator = pattern_validator(settings.account_number_pattern)
    else:
        validator = accept_any_account_number

    return Ledger(
        account_number_validator=validator,
        enforce_unique_account_numbers=settings.enforce_unique_account_numbers,
    )
