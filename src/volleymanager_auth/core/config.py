"""
Configuration for the VolleyManager session client.

``AuthServiceConfig`` is the explicit settings object passed to the client
at construction time. ``Config`` loads those settings (and credentials for
the command-line entry point) from a JSON file and environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from pathlib import Path

import requests  # type: ignore

from . import constants


def _no_session_headers() -> Dict[str, str]:
    return {}


def _ignore_response(response: requests.Response) -> None:
    return None


@dataclass
class AuthServiceConfig:
    """Settings for one session client instance."""

    base_url: str
    # Extra headers for every request, e.g. a session header for proxies
    # that cannot forward cookies
    get_session_headers: Callable[[], Dict[str, str]] = _no_session_headers
    # Called with every response so a session header can be captured
    capture_session_token: Callable[[requests.Response], None] = _ignore_response
    cookie_processing_delay_ms: int = constants.DEFAULT_COOKIE_PROCESSING_DELAY_MS
    timeout: int = constants.DEFAULT_TIMEOUT
    verify_ssl: bool = True
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("volleymanager_auth")
    )

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if self.cookie_processing_delay_ms < 0:
            raise ValueError("cookie_processing_delay_ms must not be negative")

    def url(self, path: str) -> str:
        """Build an absolute endpoint URL from a backend path."""
        return f"{self.base_url}/{path.lstrip('/')}"


class Config:
    """Configuration manager loading a JSON file with environment overrides."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("VM_BASE_URL"):
            self.config.setdefault("api", {})["base_url"] = os.getenv("VM_BASE_URL")

        if os.getenv("VM_COOKIE_DELAY_MS"):
            self.config.setdefault("api", {})["cookie_processing_delay_ms"] = int(
                os.getenv("VM_COOKIE_DELAY_MS")
            )

        if os.getenv("VM_USERNAME"):
            self.config.setdefault("authentication", {})["username"] = os.getenv("VM_USERNAME")

        if os.getenv("VM_PASSWORD"):
            self.config.setdefault("authentication", {})["password"] = os.getenv("VM_PASSWORD")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        if "api" not in self.config:
            raise ValueError("Missing required configuration sections: api")

        if not self.config["api"].get("base_url"):
            raise ValueError("Missing required configuration keys: api.base_url")

        delay = self.config["api"].get("cookie_processing_delay_ms")
        if delay is not None and (not isinstance(delay, int) or delay < 0):
            raise ValueError("api.cookie_processing_delay_ms must be a non-negative integer")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def api_base_url(self) -> str:
        """Get backend base URL."""
        return self.get("api.base_url", "")

    @property
    def api_timeout(self) -> int:
        """Get request timeout in seconds."""
        return self.get("api.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def api_verify_ssl(self) -> bool:
        """Get SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def cookie_processing_delay_ms(self) -> int:
        """Get delay before the dashboard re-fetch in milliseconds."""
        return self.get(
            "api.cookie_processing_delay_ms",
            constants.DEFAULT_COOKIE_PROCESSING_DELAY_MS
        )

    @property
    def auth_username(self) -> Optional[str]:
        """Get authentication username."""
        return self.get("authentication.username")

    @property
    def auth_password(self) -> Optional[str]:
        """Get authentication password."""
        return self.get("authentication.password")

    @property
    def log_level(self) -> str:
        """Get log level name."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get optional log file path."""
        return self.get("logging.file")

    def to_service_config(self, logger: Optional[logging.Logger] = None) -> AuthServiceConfig:
        """Build the client settings object from this configuration."""
        service_config = AuthServiceConfig(
            base_url=self.api_base_url,
            cookie_processing_delay_ms=self.cookie_processing_delay_ms,
            timeout=self.api_timeout,
            verify_ssl=self.api_verify_ssl,
        )
        if logger is not None:
            service_config.logger = logger
        return service_config

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, base_url={self.api_base_url})"
