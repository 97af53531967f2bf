"""
Unified Logging Module
======================

Single logging entry point for the excel_records package.

Usage:
    from excel_records.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Opening workbook: %s", file_path)
    logger.debug("Header row for %s: %d", sheet_name, idx)
    logger.warning("Sheet skipped: %s", sheet_name)
"""

import logging
import sys
from typing import Optional, Union

# Default log format with timestamp, level, and module name
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = logging.INFO

ROOT_LOGGER_NAME = "excel_records"

_root_configured = False


def _configure_root_logger() -> None:
    """
    Attach a stdout handler to the package root logger.

    Runs once; guarded by the module-level ``_root_configured`` flag.
    """
    global _root_configured
    if _root_configured:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(DEFAULT_LEVEL)
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _root_configured = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a configured logger.

    Args:
        name: logger name, normally the caller's ``__name__``
        level: optional level; the root level (INFO) applies when omitted
    """
    _configure_root_logger()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_level(level: Union[int, str], logger_name: Optional[str] = None) -> None:
    """
    Set the level of a named logger, or of the package root logger.

    Example:
        set_level(logging.DEBUG)                                   # whole package
        set_level(logging.DEBUG, "excel_records.excel.processor")  # one module
    """
    _configure_root_logger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    logger.setLevel(level)
