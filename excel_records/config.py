"""
Configuration Module
====================

Application settings loaded from environment variables and a ``.env`` file.
These only seed defaults for the command line; library callers pass a
:class:`~excel_records.excel.config.ParseOptions` explicitly.
"""

import logging

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """
    Application settings, populated automatically from the environment.

    Attributes:
        LOG_LEVEL: logging level name for the package root logger
        HEADER_ROW_SCAN_LIMIT: rows scanned for header detection by the CLI
        MAX_CONCURRENT_SHEETS: CLI admission bound; 0 or less means unbounded
        OUTPUT_JSON_NAME: default file name for JSON output
    """
    LOG_LEVEL: str = "INFO"
    HEADER_ROW_SCAN_LIMIT: int = 50
    MAX_CONCURRENT_SHEETS: int = 5
    OUTPUT_JSON_NAME: str = "output.json"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Reject names the logging module does not know."""
        name = (v or "").strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(
                f"LOG_LEVEL {v!r} is not a valid logging level. "
                "Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL."
            )
        return name


_settings_instance = None


def get_settings() -> Settings:
    """
    Return the settings singleton, creating it on first use.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
