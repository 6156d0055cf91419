"""
Data models for the VolleyManager session client.

Contains DTOs for authentication, the embedded active party and the
derived user profile.
"""

from .auth import (
    LoginFormFields,
    AuthErrorKind,
    AuthError,
    AuthFailure,
    LoginResult,
    SessionCheckResult,
)
from .party import InflatedAssociationValue, AttributeValue, ActiveParty
from .user import OccupationType, Occupation, UserProfile, DerivedUser

__all__ = [
    "LoginFormFields",
    "AuthErrorKind",
    "AuthError",
    "AuthFailure",
    "LoginResult",
    "SessionCheckResult",
    "InflatedAssociationValue",
    "AttributeValue",
    "ActiveParty",
    "OccupationType",
    "Occupation",
    "UserProfile",
    "DerivedUser",
]
