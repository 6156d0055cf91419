"""
Core utilities for the VolleyManager session client.

Provides configuration management, logging and backend constants.
"""

from .config import Config, AuthServiceConfig
from .logger import setup_logger, LoggerContext
from . import constants

__all__ = [
    "Config",
    "AuthServiceConfig",
    "setup_logger",
    "LoggerContext",
    "constants",
]
