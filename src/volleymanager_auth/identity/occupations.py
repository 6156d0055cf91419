"""
Occupation parsing from active party attribute values.
"""

import re
from typing import Iterable, List, Optional

from ..core import constants
from ..models import AttributeValue, Occupation, OccupationType


ROLE_PATTERNS = (
    (OccupationType.REFEREE, re.compile(r":Referee$")),
    (OccupationType.PLAYER, re.compile(r":Player$")),
    (OccupationType.CLUB_ADMIN, re.compile(r":ClubAdmin$")),
    (OccupationType.ASSOCIATION_ADMIN, re.compile(r":AssociationAdmin$")),
    (OccupationType.LINESMEN, re.compile(r":Linesmen$")),
)


def occupation_type_for_role(role_identifier: Optional[str]) -> Optional[OccupationType]:
    """Map a backend role identifier to an occupation type by its suffix."""
    if not role_identifier:
        return None
    for occupation_type, pattern in ROLE_PATTERNS:
        if pattern.search(role_identifier):
            return occupation_type
    return None


def derive_association_code(name: Optional[str]) -> Optional[str]:
    """
    Derive an association code from its full name.

    Takes the uppercased first letter of every word, skipping articles and
    conjunctions: "Association de Volleyball" -> "AV".

    Args:
        name: Full association name

    Returns:
        The code, or None for an empty name
    """
    if not name:
        return None

    initials = "".join(
        word[0].upper()
        for word in name.split()
        if word.lower() not in constants.ASSOCIATION_CODE_STOP_WORDS
    )
    return initials or None


def parse_occupation(attribute: AttributeValue) -> Optional[Occupation]:
    """Parse a referee occupation from one attribute value."""
    if not attribute.identity or not attribute.role_identifier:
        return None

    if occupation_type_for_role(attribute.role_identifier) is not OccupationType.REFEREE:
        return None

    inflated = attribute.inflated_value
    association_code = None
    if inflated is not None:
        association_code = inflated.short_name or derive_association_code(inflated.name)

    return Occupation(
        id=attribute.identity,
        type=OccupationType.REFEREE,
        association_code=association_code,
    )


def parse_occupations(attributes: Optional[Iterable[AttributeValue]]) -> List[Occupation]:
    """
    Parse referee occupations, keeping the first one per association.

    Occupations without an association code are keyed by their id.
    """
    if not attributes:
        return []

    occupations = []
    seen = set()
    for attribute in attributes:
        occupation = parse_occupation(attribute)
        if occupation is None:
            continue
        key = occupation.association_code or occupation.id
        if key in seen:
            continue
        seen.add(key)
        occupations.append(occupation)

    return occupations


def filter_referee_associations(
    attributes: Optional[Iterable[AttributeValue]]
) -> List[AttributeValue]:
    """Keep only referee memberships of an association."""
    if not attributes:
        return []

    return [
        attribute for attribute in attributes
        if attribute.role_identifier == constants.REFEREE_ROLE_IDENTIFIER
        and attribute.is_association
    ]


def has_multiple_associations(attributes: Optional[Iterable[AttributeValue]]) -> bool:
    """Check whether the referee memberships span more than one association."""
    associations = {
        attribute.inflated_value.identity
        for attribute in filter_referee_associations(attributes)
        if attribute.inflated_value is not None and attribute.inflated_value.identity
    }
    return len(associations) > 1
