"""
Active party data models.

The backend embeds an ``activeParty`` object in authenticated pages. These
DTOs hold the parts of it the client reads. Values of the wrong JSON type
are dropped, so every text field is either a string or None.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core import constants


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class InflatedAssociationValue:
    """Association referenced by a membership attribute."""

    identity: Optional[str] = None
    name: Optional[str] = None
    short_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InflatedAssociationValue":
        return cls(
            identity=_text(data.get("__identity")),
            name=_text(data.get("name")),
            short_name=_text(data.get("shortName")),
        )


@dataclass(frozen=True)
class AttributeValue:
    """
    A membership or flag attribute of the active party.

    ``type`` distinguishes association memberships (containing
    ``AbstractAssociation``) from primitive flag attributes. Only object
    inflated values are kept; primitive ones (booleans, strings, numbers)
    leave ``inflated_value`` unset.
    """

    identity: Optional[str] = None
    role_identifier: Optional[str] = None
    type: Optional[str] = None
    inflated_value: Optional[InflatedAssociationValue] = None

    @property
    def is_association(self) -> bool:
        return bool(self.type) and constants.ASSOCIATION_TYPE_SUFFIX in self.type

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttributeValue":
        inflated = data.get("inflatedValue")
        return cls(
            identity=_text(data.get("__identity")),
            role_identifier=_text(data.get("roleIdentifier")),
            type=_text(data.get("type")) or _text(data.get("attributeIdentifier")),
            inflated_value=(
                InflatedAssociationValue.from_dict(inflated)
                if isinstance(inflated, dict) else None
            ),
        )


def _attribute_list(values: Any) -> List[AttributeValue]:
    if not isinstance(values, list):
        return []
    return [AttributeValue.from_dict(value) for value in values if isinstance(value, dict)]


@dataclass(frozen=True)
class ActiveParty:
    """Identity and role context of the authenticated principal."""

    identity: Optional[str] = None
    grouped_eligible_attribute_values: List[AttributeValue] = field(default_factory=list)
    eligible_attribute_values: List[AttributeValue] = field(default_factory=list)
    active_role_identifier: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActiveParty":
        return cls(
            identity=_text(data.get("__identity")),
            grouped_eligible_attribute_values=_attribute_list(
                data.get("groupedEligibleAttributeValues")
            ),
            eligible_attribute_values=_attribute_list(data.get("eligibleAttributeValues")),
            active_role_identifier=_text(data.get("activeRoleIdentifier")),
        )
