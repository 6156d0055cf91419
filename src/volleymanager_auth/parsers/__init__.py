"""
HTML extractors for backend pages.

Everything here is pure and never raises on malformed input.
"""

from .forms import (
    ResponseAnalysis,
    extract_login_form_fields,
    extract_csrf_token,
    is_dashboard_content,
    is_login_page_content,
    analyze_response,
)
from .active_party import (
    ActivePartyMatcher,
    DEFAULT_MATCHERS,
    extract_active_party,
    extract_active_party_data,
    looks_like_active_party,
)

__all__ = [
    "ResponseAnalysis",
    "extract_login_form_fields",
    "extract_csrf_token",
    "is_dashboard_content",
    "is_login_page_content",
    "analyze_response",
    "ActivePartyMatcher",
    "DEFAULT_MATCHERS",
    "extract_active_party",
    "extract_active_party_data",
    "looks_like_active_party",
]
