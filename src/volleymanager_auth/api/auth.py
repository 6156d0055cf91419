"""
Authentication operations for the VolleyManager backend.

The backend has no login API, so the client logs in like a browser:
load the login page, post the form with its anti-forgery token, interpret
whichever response shape comes back, and read the session token from the
dashboard.
"""

import time
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

import pytz  # type: ignore
import requests  # type: ignore

from .client import APIClient
from ..core import constants
from ..models import (
    AuthError,
    AuthErrorKind,
    AuthFailure,
    LoginFormFields,
    LoginResult,
    SessionCheckResult,
)
from ..parsers import (
    analyze_response,
    extract_active_party,
    extract_csrf_token,
    extract_login_form_fields,
    is_dashboard_content,
    is_login_page_content,
)


def build_login_form_data(
    username: str,
    password: str,
    form_fields: LoginFormFields
) -> Dict[str, str]:
    """Build the authenticate form body in the backend's field order."""
    return {
        constants.REFERRER_PACKAGE_FIELD: form_fields.referrer_package,
        constants.REFERRER_SUBPACKAGE_FIELD: form_fields.referrer_subpackage,
        constants.REFERRER_CONTROLLER_FIELD: form_fields.referrer_controller,
        constants.REFERRER_ACTION_FIELD: form_fields.referrer_action,
        constants.REFERRER_ARGUMENTS_FIELD: form_fields.referrer_arguments,
        constants.TRUSTED_PROPERTIES_FIELD: form_fields.trusted_properties,
        constants.USERNAME_FIELD: username,
        constants.PASSWORD_FIELD: password,
    }


def is_redirect(response: requests.Response) -> bool:
    return constants.HTTP_REDIRECT_MIN <= response.status_code < constants.HTTP_REDIRECT_MAX


def is_opaque_redirect(response: requests.Response) -> bool:
    """
    Check for a redirect whose target cannot be read.

    Status 0, or a 3xx without a Location header (stripped by a proxy).
    """
    if response.status_code == 0:
        return True
    return is_redirect(response) and not response.headers.get("Location")


def is_redirect_to_dashboard(response: requests.Response) -> bool:
    location = response.headers.get("Location")
    return is_redirect(response) and bool(location) and constants.DASHBOARD_PATH in location


def _error(kind: AuthErrorKind, message: str) -> AuthError:
    return AuthError(kind=kind, message=message)


class AuthAPI(APIClient):
    """Client with login, logout and session check against the backend."""

    def login(self, username: str, password: str) -> LoginResult:
        """
        Log in with username and password.

        Never raises: every failure is returned as a typed error.

        Args:
            username: VolleyManager username
            password: Password

        Returns:
            Login result with the CSRF token and dashboard HTML on success
        """
        self.logger.info("Logging in to VolleyManager")

        try:
            login_page_html = self.fetch_login_page()

            if extract_csrf_token(login_page_html):
                self.logger.info("Already logged in, fetching dashboard...")
                result = self._load_dashboard(
                    missing_token=_error(
                        AuthErrorKind.SESSION_NOT_ESTABLISHED,
                        constants.MSG_SESSION_NOT_ESTABLISHED
                    )
                )
            else:
                form_fields = extract_login_form_fields(login_page_html)
                if form_fields is None:
                    raise AuthFailure(_error(
                        AuthErrorKind.MALFORMED_LOGIN_PAGE,
                        constants.MSG_FORM_FIELDS_MISSING
                    ))
                result = self.submit_credentials(username, password, form_fields)

        except AuthFailure as e:
            result = LoginResult.failed(e.error)

        except Exception as e:
            self.logger.error(f"Login error: {e}", exc_info=True)
            result = LoginResult.failed(_error(AuthErrorKind.NETWORK, str(e) or "Login failed"))

        if result.success:
            self.logger.info("Successfully logged in")
        else:
            self.logger.warning(f"Login failed: {result.error.kind.value}")

        return result

    def fetch_login_page(self) -> str:
        """
        Load the login page.

        Returns:
            Login page HTML

        Raises:
            AuthFailure: If the page cannot be loaded
        """
        try:
            response = self.get(constants.LOGIN_PAGE_PATH)
        except requests.exceptions.RequestException:
            raise AuthFailure(_error(AuthErrorKind.NETWORK, constants.MSG_LOGIN_PAGE_FAILED))

        if not response.ok:
            self.logger.error(f"Login page returned HTTP {response.status_code}")
            raise AuthFailure(_error(AuthErrorKind.NETWORK, constants.MSG_LOGIN_PAGE_FAILED))

        return response.text

    def fetch_dashboard(self) -> Tuple[str, Optional[str]]:
        """
        Load the dashboard after giving the transport time to store cookies.

        Returns:
            Dashboard HTML and its CSRF token, if any

        Raises:
            requests.exceptions.RequestException: On transport failure or non-2xx status
        """
        delay_ms = self.config.cookie_processing_delay_ms
        if delay_ms > 0:
            time.sleep(delay_ms / 1000.0)

        response = self.get(constants.DASHBOARD_PATH)
        response.raise_for_status()

        html = response.text
        return html, extract_csrf_token(html)

    def _load_dashboard(self, missing_token: AuthError) -> LoginResult:
        """Finish a login that looks successful by reading the dashboard token."""
        try:
            html, csrf_token = self.fetch_dashboard()
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Dashboard could not be loaded after login: {e}")
            raise AuthFailure(_error(
                AuthErrorKind.DASHBOARD_UNREACHABLE, constants.MSG_DASHBOARD_UNREACHABLE
            ))

        if not csrf_token:
            raise AuthFailure(missing_token)

        return LoginResult.succeeded(csrf_token, html)

    def submit_credentials(
        self,
        username: str,
        password: str,
        form_fields: LoginFormFields
    ) -> LoginResult:
        """
        Post the login form and interpret the response.

        Raises:
            AuthFailure: On any authentication failure
            requests.exceptions.RequestException: If the post itself fails
        """
        response = self.post_form(
            constants.AUTHENTICATE_PATH,
            build_login_form_data(username, password, form_fields),
            allow_redirects=False,
        )

        if response.status_code == constants.HTTP_LOCKED:
            raise AuthFailure(self._parse_lockout(response))

        self.logger.info(f"Auth response received: status={response.status_code}")

        session_not_established = _error(
            AuthErrorKind.SESSION_NOT_ESTABLISHED, constants.MSG_SESSION_NOT_ESTABLISHED
        )

        payload = self._proxy_json_payload(response)
        if payload is not None:
            if payload.get("success") and payload.get("redirectUrl"):
                return self._load_dashboard(missing_token=session_not_established)
            if "success" in payload and not payload["success"]:
                raise AuthFailure(_error(
                    AuthErrorKind.INVALID_CREDENTIALS, constants.MSG_INVALID_CREDENTIALS
                ))

        if is_opaque_redirect(response):
            self.logger.info("Got opaque redirect response, assuming successful login...")
            return self._load_dashboard(
                missing_token=_error(
                    AuthErrorKind.DASHBOARD_UNREACHABLE, constants.MSG_DASHBOARD_UNREACHABLE
                )
            )

        if is_redirect_to_dashboard(response):
            self.logger.info("Login successful (detected from redirect), fetching dashboard...")
            return self._load_dashboard(missing_token=session_not_established)

        if not response.ok:
            raise AuthFailure(_error(AuthErrorKind.NETWORK, constants.MSG_AUTH_REQUEST_FAILED))

        html = response.text

        if is_dashboard_content(html):
            csrf_token = extract_csrf_token(html)
            if csrf_token:
                return LoginResult.succeeded(csrf_token, html)

        analysis = analyze_response(html)

        if analysis.has_auth_error:
            raise AuthFailure(_error(
                AuthErrorKind.INVALID_CREDENTIALS, constants.MSG_INVALID_CREDENTIALS
            ))

        if analysis.has_tfa_page:
            raise AuthFailure(_error(
                AuthErrorKind.TWO_FACTOR_UNSUPPORTED, constants.MSG_TFA_UNSUPPORTED
            ))

        raise AuthFailure(_error(AuthErrorKind.UNKNOWN, constants.MSG_LOGIN_FAILED))

    def _parse_lockout(self, response: requests.Response) -> AuthError:
        """Build the lockout error from a 423 body, tolerating any body shape."""
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            return _error(AuthErrorKind.LOCKED, constants.MSG_LOCKED_FALLBACK)

        locked_until = payload.get("lockedUntil")
        if isinstance(locked_until, bool) or not isinstance(locked_until, (int, float)):
            locked_until = None

        unlocks_at = None
        if locked_until is not None:
            unlocks_at = datetime.now(pytz.UTC) + timedelta(seconds=locked_until)

        return AuthError(
            kind=AuthErrorKind.LOCKED,
            message=payload.get("message") or constants.MSG_LOCKED,
            locked_until_seconds=int(locked_until) if locked_until is not None else None,
            unlocks_at=unlocks_at,
        )

    def _proxy_json_payload(self, response: requests.Response) -> Optional[Dict[str, Any]]:
        """Read the JSON body some proxies return instead of a redirect."""
        content_type = response.headers.get("Content-Type", "")
        if response.status_code != constants.HTTP_OK or "application/json" not in content_type:
            return None

        try:
            payload = response.json()
        except ValueError:
            return None

        return payload if isinstance(payload, dict) else None

    def logout(self) -> None:
        """Log out. Failures are logged, never raised."""
        self.logger.info("Logging out from VolleyManager")

        try:
            self._make_request("POST", constants.LOGOUT_PATH, allow_redirects=False)
        except Exception as e:
            self.logger.error(f"Logout request failed: {e}")

    def check_session(self) -> SessionCheckResult:
        """
        Check whether the current session is still authenticated.

        A 200 response rendering the login page means the session expired.

        Returns:
            Session state with token and active party when valid
        """
        try:
            response = self.get(constants.DASHBOARD_PATH)
            if not response.ok:
                return SessionCheckResult(valid=False)

            html = response.text
            if not is_dashboard_content(html):
                if is_login_page_content(html):
                    self.logger.info("Session expired: dashboard request returned the login page")
                return SessionCheckResult(valid=False)

            csrf_token = extract_csrf_token(html)
            if not csrf_token:
                return SessionCheckResult(valid=False)

            return SessionCheckResult(
                valid=True,
                csrf_token=csrf_token,
                active_party=extract_active_party(html),
            )

        except Exception as e:
            self.logger.error(f"Session check failed: {e}")
            return SessionCheckResult(valid=False)
