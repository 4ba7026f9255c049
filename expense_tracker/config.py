"""Configuration management for the expense tracker.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.  Values may also be
supplied through a ``.env`` file in the working directory or any of
its parents.
"""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("EXPENSE_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))

# Database
DB_PATH = Path(
    os.getenv("EXPENSE_TRACKER_DB_PATH", DATA_DIR / "expenses.db")
).resolve()

# Stand-in for an authenticated session; sign-in is handled outside this app.
USER_ID = os.getenv("EXPENSE_TRACKER_USER_ID", "local")

DEFAULT_BUDGET = float(os.getenv("EXPENSE_TRACKER_DEFAULT_BUDGET", "50000"))
CURRENCY_SYMBOL = os.getenv("EXPENSE_TRACKER_CURRENCY", "₹")
LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO").upper()

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "default": {
            "class": "rich.logging.RichHandler",
            "formatter": "default",
            "rich_tracebacks": True,
            "show_path": False,
            "log_time_format": "%Y-%m-%d %H:%M:%S",
        },
    },
    "loggers": {
        "expense_tracker": {
            "handlers": ["default"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, DB_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def configure_logging() -> None:
    """Install the rich console handler for the ``expense_tracker`` loggers."""
    logging.config.dictConfig(LOGGING_CONFIG)
