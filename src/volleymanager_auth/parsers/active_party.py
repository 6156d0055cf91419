"""
Active party extraction.

Authenticated pages embed the ``activeParty`` object in one of several
template conventions. Each convention is an ``ActivePartyMatcher``;
``extract_active_party`` tries the matchers in order and returns the
first candidate that decodes to something shaped like an active party.
"""

import html as html_lib
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Sequence

from ..core import constants
from ..models import ActiveParty


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivePartyMatcher:
    """
    One embedding convention.

    Args:
        name: Label used in debug logs
        pattern: Regex whose first group captures the encoded JSON
        first_match_only: Only consider the first match in the document
    """

    name: str
    pattern: "re.Pattern[str]"
    first_match_only: bool = False

    def candidates(self, html: str) -> Iterator[str]:
        """Yield encoded JSON payloads in document order."""
        for match in self.pattern.finditer(html):
            if match.group(1):
                yield match.group(1)
            if self.first_match_only:
                return


# window.activeParty = JSON.parse('...')
SCRIPT_ASSIGNMENT_MATCHER = ActivePartyMatcher(
    name="script",
    pattern=re.compile(
        r"window\.activeParty\s*=\s*JSON\.parse\s*\(\s*'((?:[^'\\]|\\.)*)'\s*\)"
    ),
    first_match_only=True,
)

# <main-layout :active-party="$convertFromBackendToFrontend({...})">
ACTIVE_PARTY_ATTRIBUTE_MATCHER = ActivePartyMatcher(
    name=":active-party",
    pattern=re.compile(
        r':active-party="\$convertFromBackendToFrontend\((\{.+?\})\)"', re.DOTALL
    ),
)

# <component :party="$convertFromBackendToFrontend({...})">
PARTY_ATTRIBUTE_MATCHER = ActivePartyMatcher(
    name=":party",
    pattern=re.compile(
        r':party="\$convertFromBackendToFrontend\((\{.+?\})\)"', re.DOTALL
    ),
)

DEFAULT_MATCHERS: Sequence[ActivePartyMatcher] = (
    SCRIPT_ASSIGNMENT_MATCHER,
    ACTIVE_PARTY_ATTRIBUTE_MATCHER,
    PARTY_ATTRIBUTE_MATCHER,
)


def looks_like_active_party(value: Any) -> bool:
    """Check that a decoded value is an object with an active party key."""
    if not isinstance(value, dict):
        return False
    return any(key in value for key in constants.ACTIVE_PARTY_KEYS)


def decode_payload(encoded: str) -> Optional[Dict[str, Any]]:
    """HTML-entity decode and parse one candidate payload."""
    try:
        parsed = json.loads(html_lib.unescape(encoded))
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can handle
        return None
    return parsed if looks_like_active_party(parsed) else None


def extract_active_party_data(
    html: str,
    matchers: Sequence[ActivePartyMatcher] = DEFAULT_MATCHERS
) -> Optional[Dict[str, Any]]:
    """
    Find the raw active party object in page HTML.

    Args:
        html: Page markup
        matchers: Conventions to try, in order

    Returns:
        The decoded JSON object, or None if no convention matched
    """
    if not html or not isinstance(html, str):
        return None

    for matcher in matchers:
        for encoded in matcher.candidates(html):
            data = decode_payload(encoded)
            if data is not None:
                logger.debug(f"activeParty found via {matcher.name} convention")
                return data
            logger.debug(f"Skipping malformed {matcher.name} activeParty candidate")

    return None


def extract_active_party(
    html: str,
    matchers: Sequence[ActivePartyMatcher] = DEFAULT_MATCHERS
) -> Optional[ActiveParty]:
    """Extract the active party embedded in page HTML."""
    data = extract_active_party_data(html, matchers)
    return ActiveParty.from_dict(data) if data is not None else None
