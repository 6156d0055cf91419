"""
Identity derivation.

Turns the scraped active party into a normalized user profile and the
selected active occupation.
"""

from .occupations import (
    occupation_type_for_role,
    derive_association_code,
    parse_occupation,
    parse_occupations,
    filter_referee_associations,
    has_multiple_associations,
)
from .deriver import derive_user, select_attribute_values

__all__ = [
    "occupation_type_for_role",
    "derive_association_code",
    "parse_occupation",
    "parse_occupations",
    "filter_referee_associations",
    "has_multiple_associations",
    "derive_user",
    "select_attribute_values",
]
