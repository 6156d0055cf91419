"""
API layer for the VolleyManager backend.

Provides the HTTP client and the browser-style login, logout and session
check operations.
"""

from .client import APIClient
from .auth import AuthAPI, build_login_form_data, is_opaque_redirect, is_redirect_to_dashboard

__all__ = [
    "APIClient",
    "AuthAPI",
    "build_login_form_data",
    "is_opaque_redirect",
    "is_redirect_to_dashboard",
]
