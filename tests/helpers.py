# tests/helpers.py

import json
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import requests  # type: ignore

from src.volleymanager_auth.core import AuthServiceConfig


BASE_URL = "https://volleymanager.test"

LOGIN_PAGE_HTML = """
<form method="post" action="/login">
    <input type="hidden" name="__trustedProperties" value="trusted-token" />
    <input type="hidden" name="__referrer[@package]" value="SportManager.Volleyball" />
</form>
"""

DASHBOARD_HTML = '<html data-csrf-token="csrf-12345"><body>Dashboard</body></html>'


def make_response(
    status_code: int = 200,
    text: str = "",
    headers: Optional[Dict[str, str]] = None,
    json_body: Any = None
) -> requests.Response:
    """Build a real requests.Response without network access."""
    response = requests.Response()
    response.status_code = status_code
    response.headers.update(headers or {})
    if json_body is not None:
        text = json.dumps(json_body)
        response.headers.setdefault("Content-Type", "application/json")
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.url = BASE_URL
    return response


def make_session(responses: List[Any]) -> Mock:
    """
    Create a mock session returning the given responses in order.

    Exceptions in the list are raised instead of returned.
    """
    session = Mock()
    session.headers = {}
    session.request = Mock(side_effect=responses)
    return session


def make_config(**overrides) -> AuthServiceConfig:
    """Client settings for tests: no cookie delay, mock logger."""
    settings = {
        "base_url": BASE_URL,
        "cookie_processing_delay_ms": 0,
        "logger": Mock(),
    }
    settings.update(overrides)
    return AuthServiceConfig(**settings)


def requested_urls(session: Mock) -> List[str]:
    """URLs of all requests made through a mock session, in order."""
    return [call.kwargs["url"] for call in session.request.call_args_list]


def encode_entities(payload: Dict[str, Any]) -> str:
    """JSON-encode and HTML-escape a payload the way the backend templates do."""
    return json.dumps(payload).replace("&", "&amp;").replace('"', "&quot;")
