"""
Authentication data models.

Contains DTOs for the login form, login results and authentication errors.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .party import ActiveParty


@dataclass(frozen=True)
class LoginFormFields:
    """Anti-forgery token and referrer routing fields of the login form."""

    trusted_properties: str
    referrer_package: str
    referrer_subpackage: str
    referrer_controller: str
    referrer_action: str
    referrer_arguments: str


class AuthErrorKind(str, Enum):
    """Closed set of authentication failure kinds."""

    INVALID_CREDENTIALS = "invalid_credentials"
    LOCKED = "locked"
    TWO_FACTOR_UNSUPPORTED = "two_factor_unsupported"
    NETWORK = "network"
    MALFORMED_LOGIN_PAGE = "malformed_login_page"
    DASHBOARD_UNREACHABLE = "dashboard_unreachable"
    SESSION_NOT_ESTABLISHED = "session_not_established"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AuthError:
    """Typed authentication failure."""

    kind: AuthErrorKind
    message: str
    locked_until_seconds: Optional[int] = None
    unlocks_at: Optional[datetime] = None


class AuthFailure(Exception):
    """Raised inside the login flow to stop it with a typed error."""

    def __init__(self, error: AuthError):
        super().__init__(error.message)
        self.error = error


@dataclass(frozen=True)
class LoginResult:
    """Outcome of one login attempt."""

    success: bool
    csrf_token: Optional[str] = None
    dashboard_html: Optional[str] = None
    error: Optional[AuthError] = None

    @classmethod
    def succeeded(cls, csrf_token: str, dashboard_html: str) -> "LoginResult":
        return cls(success=True, csrf_token=csrf_token, dashboard_html=dashboard_html)

    @classmethod
    def failed(cls, error: AuthError) -> "LoginResult":
        return cls(success=False, error=error)

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None


@dataclass(frozen=True)
class SessionCheckResult:
    """Outcome of probing the dashboard with the current session."""

    valid: bool
    csrf_token: Optional[str] = None
    active_party: Optional[ActiveParty] = None
