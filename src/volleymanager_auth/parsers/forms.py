"""
Login page and response extractors.

Pulls the login form fields and the session (CSRF) token out of backend
HTML, classifies pages as dashboard or login page, and scans
authentication responses for error and two-factor markers.

All functions are total: they return None or False on unusable input.
"""

import html as html_lib
import re
from dataclasses import dataclass
from typing import Optional

from ..core import constants
from ..models import LoginFormFields


_TRUSTED_PROPERTIES_PATTERN = re.compile(
    r'name="' + re.escape(constants.TRUSTED_PROPERTIES_FIELD) + r'"\s+value="([^"]*)"'
)
_CSRF_TOKEN_PATTERN = re.compile(
    re.escape(constants.CSRF_TOKEN_ATTRIBUTE) + r'="([^"]*)"'
)


@dataclass(frozen=True)
class ResponseAnalysis:
    """Markers found in an authentication response."""

    has_auth_error: bool
    has_tfa_page: bool


def _field_value(html: str, name: str, default: str) -> str:
    pattern = r'name="' + re.escape(name) + r'"\s+value="([^"]*)"'
    match = re.search(pattern, html, re.IGNORECASE)
    return html_lib.unescape(match.group(1)) if match else default


def extract_login_form_fields(html: str) -> Optional[LoginFormFields]:
    """
    Extract the login form fields from login page HTML.

    The ``__trustedProperties`` token is required; referrer fields fall
    back to the backend defaults when missing.

    Args:
        html: Login page markup

    Returns:
        Form fields, or None if the token is missing
    """
    if not html or not isinstance(html, str):
        return None

    match = _TRUSTED_PROPERTIES_PATTERN.search(html)
    if not match or not match.group(1):
        return None

    return LoginFormFields(
        trusted_properties=html_lib.unescape(match.group(1)),
        referrer_package=_field_value(
            html, constants.REFERRER_PACKAGE_FIELD, constants.DEFAULT_REFERRER_PACKAGE
        ),
        referrer_subpackage=_field_value(
            html, constants.REFERRER_SUBPACKAGE_FIELD, constants.DEFAULT_REFERRER_SUBPACKAGE
        ),
        referrer_controller=_field_value(
            html, constants.REFERRER_CONTROLLER_FIELD, constants.DEFAULT_REFERRER_CONTROLLER
        ),
        referrer_action=_field_value(
            html, constants.REFERRER_ACTION_FIELD, constants.DEFAULT_REFERRER_ACTION
        ),
        referrer_arguments=_field_value(
            html, constants.REFERRER_ARGUMENTS_FIELD, constants.DEFAULT_REFERRER_ARGUMENTS
        ),
    )


def extract_csrf_token(html: str) -> Optional[str]:
    """Return the first ``data-csrf-token`` value in the page, if any."""
    if not html or not isinstance(html, str):
        return None

    match = _CSRF_TOKEN_PATTERN.search(html)
    return match.group(1) if match else None


def _has_login_form(html: str) -> bool:
    return constants.LOGIN_FORM_ACTION_MARKER in html or (
        constants.USERNAME_INPUT_MARKER in html
        and constants.PASSWORD_INPUT_MARKER in html
    )


def is_dashboard_content(html: str) -> bool:
    """
    Check whether the page is an authenticated dashboard.

    Requires a CSRF token and no login form markers. A page carrying
    both is not a dashboard.
    """
    if not html or not isinstance(html, str):
        return False
    return constants.CSRF_TOKEN_ATTRIBUTE in html and not _has_login_form(html)


def is_login_page_content(html: str) -> bool:
    """Check whether the page is the login page."""
    if not html or not isinstance(html, str):
        return False
    return _has_login_form(html) and not is_dashboard_content(html)


def analyze_response(html: str) -> ResponseAnalysis:
    """Scan an authentication response for error and two-factor markers."""
    if not html or not isinstance(html, str):
        return ResponseAnalysis(has_auth_error=False, has_tfa_page=False)

    return ResponseAnalysis(
        has_auth_error=any(marker in html for marker in constants.AUTH_ERROR_MARKERS),
        has_tfa_page=any(marker in html for marker in constants.TFA_PAGE_MARKERS),
    )
