"""Pytest configuration for the test suite.

This file is automatically loaded by pytest and sets up:
1. Loading of .env file for local settings
2. Logging configuration with third-party library suppression
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from table_progress_tracking.middleware.logging import setup_logging

# tests/conftest.py -> tests -> project_root
_project_root = Path(__file__).resolve().parent.parent

_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
setup_logging(log_level=_log_level, log_format="text")
