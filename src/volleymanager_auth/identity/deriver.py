"""
User derivation from the active party.

Runs on every login and session check, so it is pure: the previously
known user and active occupation come in as arguments and the updated
values are returned for the caller to store.
"""

from dataclasses import replace
from typing import List, Optional

from ..core import constants
from ..models import ActiveParty, AttributeValue, DerivedUser, UserProfile
from .occupations import parse_occupations


def select_attribute_values(active_party: Optional[ActiveParty]) -> List[AttributeValue]:
    """Prefer grouped attribute values, fall back to the flat list."""
    if active_party is None:
        return []
    if active_party.grouped_eligible_attribute_values:
        return active_party.grouped_eligible_attribute_values
    return active_party.eligible_attribute_values


def derive_user(
    active_party: Optional[ActiveParty],
    previous_user: Optional[UserProfile] = None,
    previous_active_occupation_id: Optional[str] = None
) -> DerivedUser:
    """
    Derive the user profile and active occupation.

    An empty parse keeps the previous occupations. Name fields are only
    ever copied from the previous user.

    Args:
        active_party: Freshly extracted active party, if any
        previous_user: User known before this call
        previous_active_occupation_id: Occupation selected before this call

    Returns:
        Updated user and the occupation id to select
    """
    occupations = parse_occupations(select_attribute_values(active_party))
    if not occupations and previous_user is not None:
        occupations = list(previous_user.occupations)

    occupation_ids = [occupation.id for occupation in occupations]
    if previous_active_occupation_id is not None and previous_active_occupation_id in occupation_ids:
        active_occupation_id: Optional[str] = previous_active_occupation_id
    else:
        active_occupation_id = occupation_ids[0] if occupation_ids else None

    user_id = (
        (active_party.identity if active_party is not None else None)
        or (previous_user.id if previous_user is not None else None)
        or constants.DEFAULT_USER_ID
    )

    if previous_user is not None:
        user = replace(previous_user, id=user_id, occupations=occupations)
    else:
        user = UserProfile(id=user_id, first_name="", last_name="", occupations=occupations)

    return DerivedUser(user=user, active_occupation_id=active_occupation_id)
