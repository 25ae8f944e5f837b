"""
Configuration

Runtime settings for the hash tree library and CLI. Values are read from the
environment (and a local .env file, if present) each time get_settings() is
called so tests and the CLI can override them.
"""

import os
import logging
from dataclasses import dataclass
from dotenv import load_dotenv

from .constants import DEFAULT_ALGORITHM, DEFAULT_ENCODING

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Container for the environment driven settings."""
    algorithm: str
    encoding: str
    log_level: str


def get_settings() -> Settings:
    """
    Read the current settings from the environment.

    Environment variables:
        HASHTREE_ALGORITHM: hashlib algorithm name (default md5)
        HASHTREE_ENCODING: encoding for text items (default utf-8)
        HASHTREE_LOG_LEVEL: logging level name used by the CLI (default INFO)

    Returns:
        Settings instance
    """
    settings = Settings(
        algorithm=os.getenv("HASHTREE_ALGORITHM", DEFAULT_ALGORITHM).strip().lower(),
        encoding=os.getenv("HASHTREE_ENCODING", DEFAULT_ENCODING).strip(),
        log_level=os.getenv("HASHTREE_LOG_LEVEL", "INFO").strip().upper(),
    )
    logger.debug(f"Loaded settings: {settings}")
    return settings
