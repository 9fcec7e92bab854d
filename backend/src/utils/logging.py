"""Logging utilities."""

import json
import logging
from typing import Dict, Optional

LOGGER_NAME = "tagadmin"

# Attribute keys whose values never reach the log
REDACTED_KEYS = frozenset({"digest", "secret", "wsse_secret", "session_secret"})


def setup_logging(level: str = "INFO"):
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def format_message(msg: str, attrs: Optional[Dict] = None) -> str:
    """Append attributes as JSON, masking credential values."""
    if not attrs:
        return msg
    safe = {
        key: "***" if str(key).lower() in REDACTED_KEYS else value
        for key, value in attrs.items()
    }
    return f"{msg} - {json.dumps(safe, default=str)}"


def log_info(msg: str, attrs: Optional[Dict] = None):
    """Log info message with attributes."""
    logging.getLogger(LOGGER_NAME).info(format_message(msg, attrs))


def log_warning(msg: str, attrs: Optional[Dict] = None):
    """Log warning message with attributes."""
    logging.getLogger(LOGGER_NAME).warning(format_message(msg, attrs))


def log_error(error_msg: str, attrs: Optional[Dict] = None):
    """Log error message with attributes."""
    logging.getLogger(LOGGER_NAME).error(format_message(error_msg, attrs))
