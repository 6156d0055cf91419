"""
User profile data models.

Contains the normalized user and occupation DTOs derived from the active
party.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OccupationType(str, Enum):
    """Coarse kind of membership a user holds."""

    REFEREE = "referee"
    PLAYER = "player"
    CLUB_ADMIN = "clubAdmin"
    ASSOCIATION_ADMIN = "associationAdmin"
    LINESMEN = "linesmen"


@dataclass(frozen=True)
class Occupation:
    """One membership of the user, e.g. referee for a regional association."""

    id: str
    type: OccupationType
    association_code: Optional[str] = None


@dataclass(frozen=True)
class UserProfile:
    """Authenticated user."""

    id: str
    first_name: str = ""
    last_name: str = ""
    occupations: List[Occupation] = field(default_factory=list)


@dataclass(frozen=True)
class DerivedUser:
    """Result of deriving the user from an active party."""

    user: UserProfile
    active_occupation_id: Optional[str] = None
