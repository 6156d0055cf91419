"""
VolleyManager Session Client

Establishes and checks sessions against the server-rendered VolleyManager
referee backend by logging in the way a browser does, and derives the
user's referee occupations from the identity data embedded in its pages.
"""

import logging

from .core import AuthServiceConfig
from .api import AuthAPI
from .identity import derive_user
from .parsers import (
    extract_login_form_fields,
    extract_csrf_token,
    is_dashboard_content,
    is_login_page_content,
    extract_active_party,
    analyze_response,
)

__version__ = "0.1.0"
__description__ = "Browser-style session client for the VolleyManager referee backend"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def __getattr__(name):
    """Lazy import to avoid loading the CLI when not needed."""
    if name == "SessionApp":
        from .main import SessionApp
        return SessionApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AuthServiceConfig",
    "AuthAPI",
    "derive_user",
    "extract_login_form_fields",
    "extract_csrf_token",
    "is_dashboard_content",
    "is_login_page_content",
    "extract_active_party",
    "analyze_response",
    "SessionApp",
]
