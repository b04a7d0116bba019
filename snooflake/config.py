"""Manages configuration variables.

This module provides:
- Config: a base class for pulling environment variables
- DevelopmentConfig: a dev config class for test environments
- ProductionConfig: a config class for production
- TestingConfig: a config class for the test suite
- config: a dict for getting configuration depending on environment
"""

import os
from datetime import datetime

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name):
    value = os.getenv(name)
    return int(value) if value else None


def _optional_datetime(name):
    value = os.getenv(name)
    return datetime.fromisoformat(value) if value else None


class Config:
    """Base class for pulling environment variables."""

    EPOCH = _optional_datetime("SNOOFLAKE_EPOCH")

    MACHINE_ID = _optional_int("MACHINE_ID")

    MAX_BATCH = int(os.getenv("MAX_BATCH", "1000"))

    LOG_PATH = os.getenv("LOG_PATH", "logs/app.log")
    LOG_REQUESTS = os.getenv("LOG_REQUESTS", "False").lower() == "true"


class DevelopmentConfig(Config):
    """Config class with DEBUG on."""

    DEBUG = True


class ProductionConfig(Config):
    """Config class with DEBUG off."""

    DEBUG = False


class TestingConfig(Config):
    """Config class for tests: no log file, fixed machine ID."""

    DEBUG = True
    TESTING = True
    LOG_PATH = None
    MACHINE_ID = 1


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
