"""
Base HTTP client for the VolleyManager backend.

Wraps a ``requests.Session`` that holds the backend session cookies and
sends every request the way a browser with caching disabled would.
"""

import logging
from typing import Dict, Optional

import requests  # type: ignore

from ..core import AuthServiceConfig


BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
}


class APIClient:
    """Base client issuing requests against the backend."""

    logger: logging.Logger

    def __init__(
        self,
        config: AuthServiceConfig,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize API client.

        Args:
            config: Client settings
            session: Session to use; a new one is created if omitted
        """
        self.config = config
        self.logger = config.logger
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(BROWSER_HEADERS)

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Collect per-request headers, session headers last."""
        headers = dict(extra or {})
        headers.update(self.config.get_session_headers() or {})
        return headers

    def _make_request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        allow_redirects: bool = True,
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request to the backend.

        Non-2xx responses are returned, not raised; callers inspect the
        status themselves.

        Args:
            method: HTTP method (GET, POST)
            path: Backend path (without base URL)
            headers: Extra request headers
            allow_redirects: Follow 3xx responses
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            requests.exceptions.RequestException: On transport failure
        """
        url = self.config.url(path)
        kwargs.setdefault("verify", self.config.verify_ssl)

        self.logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=self._headers(headers),
                allow_redirects=allow_redirects,
                timeout=self.config.timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request failed: {method} {url} - {e}")
            raise

        self.config.capture_session_token(response)
        return response

    def get(self, path: str, allow_redirects: bool = True) -> requests.Response:
        """Make GET request."""
        return self._make_request("GET", path, allow_redirects=allow_redirects)

    def post_form(
        self,
        path: str,
        data: Dict[str, str],
        allow_redirects: bool = False
    ) -> requests.Response:
        """Make URL-encoded form POST request."""
        return self._make_request(
            "POST",
            path,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            allow_redirects=allow_redirects,
            data=data,
        )

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
