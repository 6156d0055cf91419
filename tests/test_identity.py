"""
Tests for occupation parsing and user derivation.
"""

import pytest  # type: ignore

from src.volleymanager_auth.identity import (
    derive_association_code,
    derive_user,
    filter_referee_associations,
    has_multiple_associations,
    occupation_type_for_role,
    parse_occupation,
    parse_occupations,
)
from src.volleymanager_auth.models import (
    ActiveParty,
    AttributeValue,
    InflatedAssociationValue,
    Occupation,
    OccupationType,
    UserProfile,
)


REFEREE_ROLE = "Indoorvolleyball.RefAdmin:Referee"
ASSOCIATION_TYPE = "Indoorvolleyball.RefAdmin:AbstractAssociation"


def referee_attribute(identity, name=None, short_name=None, association_id=None):
    return AttributeValue(
        identity=identity,
        role_identifier=REFEREE_ROLE,
        type=ASSOCIATION_TYPE,
        inflated_value=InflatedAssociationValue(
            identity=association_id or f"assoc-{identity}",
            name=name,
            short_name=short_name,
        ),
    )


class TestDeriveAssociationCode:
    """Test cases for association code derivation."""

    @pytest.mark.parametrize("name,expected", [
        ("Swiss Volley", "SV"),
        ("Regionalverband Nordostschweiz", "RN"),
        ("Association de Volleyball", "AV"),
        ("RVNO", "R"),
        ("Fédération Vaudoise de Volleyball", "FVV"),
        ("The Association of Referees", "AR"),
        ("  Swiss   Volley  ", "SV"),
        ("Volley und Beach", "VB"),
    ])
    def test_derivation(self, name, expected):
        assert derive_association_code(name) == expected

    @pytest.mark.parametrize("name", [None, "", "   ", "de la"])
    def test_empty_names(self, name):
        assert derive_association_code(name) is None


class TestOccupationTypeForRole:
    """Test cases for role identifier classification."""

    @pytest.mark.parametrize("role,expected", [
        ("Indoorvolleyball.RefAdmin:Referee", OccupationType.REFEREE),
        ("Indoorvolleyball.Club:Player", OccupationType.PLAYER),
        ("Indoorvolleyball.Club:ClubAdmin", OccupationType.CLUB_ADMIN),
        ("Indoorvolleyball.RefAdmin:AssociationAdmin", OccupationType.ASSOCIATION_ADMIN),
        ("Indoorvolleyball.RefAdmin:Linesmen", OccupationType.LINESMEN),
    ])
    def test_known_roles(self, role, expected):
        assert occupation_type_for_role(role) is expected

    @pytest.mark.parametrize("role", [None, "", "Indoorvolleyball:Unknown", "Referee:Other"])
    def test_unknown_roles(self, role):
        assert occupation_type_for_role(role) is None


class TestParseOccupations:
    """Test cases for referee occupation parsing."""

    def test_prefers_short_name(self):
        occupation = parse_occupation(referee_attribute("o1", "Swiss Volley", "SVRZ"))
        assert occupation == Occupation(id="o1", type=OccupationType.REFEREE, association_code="SVRZ")

    def test_derives_code_from_name(self):
        occupation = parse_occupation(referee_attribute("o1", "Regionalverband Nordostschweiz"))
        assert occupation.association_code == "RN"

    def test_without_inflated_value(self):
        attribute = AttributeValue(identity="o1", role_identifier=REFEREE_ROLE, type="boolean")
        assert parse_occupation(attribute).association_code is None

    def test_ignores_other_roles(self):
        attribute = AttributeValue(
            identity="p1",
            role_identifier="Indoorvolleyball.Club:Player",
            type=ASSOCIATION_TYPE,
        )
        assert parse_occupation(attribute) is None

    def test_requires_identity(self):
        attribute = AttributeValue(role_identifier=REFEREE_ROLE)
        assert parse_occupation(attribute) is None

    def test_deduplicates_by_association_code(self):
        occupations = parse_occupations([
            referee_attribute("o1", short_name="SV"),
            referee_attribute("o2", short_name="SV"),
            referee_attribute("o3", name="Regionalverband Nordostschweiz"),
        ])

        assert [occupation.id for occupation in occupations] == ["o1", "o3"]

    def test_deduplicates_by_id_without_code(self):
        bare = AttributeValue(identity="o1", role_identifier=REFEREE_ROLE)

        occupations = parse_occupations([bare, bare, referee_attribute("o2", short_name="SV")])

        assert [occupation.id for occupation in occupations] == ["o1", "o2"]

    def test_empty_input(self):
        assert parse_occupations(None) == []
        assert parse_occupations([]) == []


class TestAssociationFilters:
    """Test cases for referee association filtering."""

    def test_filters_referee_associations(self):
        flag = AttributeValue(identity="f1", role_identifier=REFEREE_ROLE, type="boolean")
        player = AttributeValue(
            identity="p1", role_identifier="Indoorvolleyball.Club:Player", type=ASSOCIATION_TYPE
        )
        referee = referee_attribute("o1", short_name="SV")

        assert filter_referee_associations([flag, player, referee]) == [referee]
        assert filter_referee_associations(None) == []

    def test_multiple_associations(self):
        attributes = [
            referee_attribute("o1", short_name="SV", association_id="a1"),
            referee_attribute("o2", short_name="RVNO", association_id="a2"),
        ]
        assert has_multiple_associations(attributes)

    def test_same_association_twice(self):
        attributes = [
            referee_attribute("o1", short_name="SV", association_id="a1"),
            referee_attribute("o2", short_name="SV", association_id="a1"),
        ]
        assert not has_multiple_associations(attributes)
        assert not has_multiple_associations(None)


class TestDeriveUser:
    """Test cases for derive_user."""

    @pytest.fixture
    def active_party(self):
        return ActiveParty(
            identity="party-1",
            grouped_eligible_attribute_values=[
                referee_attribute("o1", short_name="SV"),
                referee_attribute("o2", name="Regionalverband Nordostschweiz"),
            ],
        )

    @pytest.fixture
    def previous_user(self):
        return UserProfile(
            id="old-id",
            first_name="Anna",
            last_name="Muster",
            occupations=[Occupation(id="old-occ", type=OccupationType.REFEREE, association_code="SV")],
        )

    def test_new_user(self, active_party):
        derived = derive_user(active_party, None, None)

        assert derived.user.id == "party-1"
        assert derived.user.first_name == ""
        assert derived.user.last_name == ""
        assert [occupation.association_code for occupation in derived.user.occupations] == ["SV", "RN"]
        assert derived.active_occupation_id == "o1"

    def test_keeps_previous_active_occupation(self, active_party):
        derived = derive_user(active_party, None, "o2")
        assert derived.active_occupation_id == "o2"

    def test_replaces_stale_active_occupation(self, active_party):
        derived = derive_user(active_party, None, "gone")
        assert derived.active_occupation_id == "o1"

    def test_preserves_names(self, active_party, previous_user):
        derived = derive_user(active_party, previous_user, None)

        assert derived.user.id == "party-1"
        assert derived.user.first_name == "Anna"
        assert derived.user.last_name == "Muster"
        assert len(derived.user.occupations) == 2

    def test_does_not_mutate_previous_user(self, active_party, previous_user):
        derive_user(active_party, previous_user, None)

        assert previous_user.id == "old-id"
        assert [occupation.id for occupation in previous_user.occupations] == ["old-occ"]

    def test_keeps_previous_occupations_on_empty_parse(self, previous_user):
        party = ActiveParty(
            identity="party-1",
            grouped_eligible_attribute_values=[
                AttributeValue(identity="p1", role_identifier="Indoorvolleyball.Club:Player"),
            ],
        )

        derived = derive_user(party, previous_user, "old-occ")

        assert derived.user.occupations == previous_user.occupations
        assert derived.active_occupation_id == "old-occ"

    def test_falls_back_to_flat_attribute_values(self):
        party = ActiveParty(
            identity="party-1",
            grouped_eligible_attribute_values=[],
            eligible_attribute_values=[referee_attribute("o9", short_name="RVNO")],
        )

        derived = derive_user(party)

        assert [occupation.id for occupation in derived.user.occupations] == ["o9"]

    def test_grouped_values_take_precedence(self):
        party = ActiveParty(
            grouped_eligible_attribute_values=[referee_attribute("grouped", short_name="SV")],
            eligible_attribute_values=[referee_attribute("flat", short_name="RVNO")],
        )

        derived = derive_user(party)

        assert [occupation.id for occupation in derived.user.occupations] == ["grouped"]

    def test_user_id_fallbacks(self, previous_user):
        assert derive_user(ActiveParty(), previous_user).user.id == "old-id"
        assert derive_user(None, None).user.id == "user"

    def test_without_anything(self):
        derived = derive_user(None, None, None)

        assert derived.user.occupations == []
        assert derived.active_occupation_id is None

    def test_idempotent(self, active_party, previous_user):
        first = derive_user(active_party, previous_user, "o2")
        second = derive_user(active_party, previous_user, "o2")

        assert first == second

    def test_rederiving_from_own_output_is_stable(self, active_party, previous_user):
        first = derive_user(active_party, previous_user, None)
        second = derive_user(active_party, first.user, first.active_occupation_id)

        assert first == second

    @pytest.mark.parametrize("attribute", [
        {"__identity": "o1", "roleIdentifier": 5, "inflatedValue": {"name": "Swiss Volley"}},
        {"__identity": ["o1"], "roleIdentifier": REFEREE_ROLE, "inflatedValue": {"shortName": "SV"}},
    ])
    def test_skips_attributes_with_non_text_keys(self, attribute):
        party = ActiveParty.from_dict({"__identity": "party-1", "eligibleAttributeValues": [attribute]})

        derived = derive_user(party)

        assert derived.user.id == "party-1"
        assert derived.user.occupations == []
        assert derived.active_occupation_id is None

    def test_ignores_non_text_association_name(self):
        party = ActiveParty.from_dict({
            "__identity": "party-1",
            "eligibleAttributeValues": [
                {"__identity": "o1", "roleIdentifier": REFEREE_ROLE, "inflatedValue": {"name": 12}},
            ],
        })

        derived = derive_user(party)

        assert derived.user.occupations == [
            Occupation(id="o1", type=OccupationType.REFEREE, association_code=None)
        ]
        assert derived.active_occupation_id == "o1"
