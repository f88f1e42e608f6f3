# tests/test_capabilities.py

"""
Tests for capability records.
"""

import pytest

from models.capabilities import (
    FULL_ACCESS,
    FULL_ADMIN_ORGANIZER_CAPABILITIES,
    FULL_ADMIN_VENUE_CAPABILITIES,
    VENUE_HOST_CAPABILITIES,
    OrganizerCapabilities,
    VenueCapabilities,
    all_flag_names,
    parse_capability_record,
)
from models.enums import AffiliationType, EntityKind
from models.event_access import EntityAffiliation


def test_partial_record_defaults_missing_flags_to_false():
    record = parse_capability_record(EntityKind.venue, {"edit_events": True})

    assert isinstance(record, VenueCapabilities)
    assert record.flag("edit_events") is True
    assert record.flag("view_financials") is False
    assert record.flag("approve_events") is False


def test_null_and_unknown_keys_are_tolerated():
    record = parse_capability_record(
        EntityKind.organizer,
        {"edit_events": None, "legacy_flag": True, "kind": "venue"},
    )

    assert isinstance(record, OrganizerCapabilities)
    assert record.edit_events is False
    assert record.flag("legacy_flag") is False


def test_no_blob_means_no_record():
    assert parse_capability_record(EntityKind.venue, None) is None


@pytest.mark.parametrize("value", ["yes", "true", "on", "1", 1, 1.0, "maybe", ["x"]])
def test_non_boolean_flag_values_read_false(value):
    record = parse_capability_record(
        EntityKind.organizer, {"edit_events": value, "manage_guests": value}
    )

    assert record.flag("edit_events") is False
    assert record.flag("manage_guests") is False


def test_bad_flag_does_not_discard_the_record():
    record = parse_capability_record(
        EntityKind.venue,
        {"edit_events": "maybe", "manage_door_staff": True, "approve_events": 1},
    )

    assert isinstance(record, VenueCapabilities)
    assert record.manage_door_staff is True
    assert record.edit_events is False
    assert record.approve_events is False


def test_non_boolean_full_admin_does_not_supersede():
    record = parse_capability_record(EntityKind.venue, {"full_admin": "true"})

    assert record.full_admin is False
    assert record.grants("edit_events") is False


def test_affiliation_accepts_either_record_kind():
    venue = EntityAffiliation(
        kind=EntityKind.venue,
        entity_id="ven1",
        affiliation=AffiliationType.team,
        capabilities=VenueCapabilities(approve_events=True),
    )
    organizer = EntityAffiliation(
        kind=EntityKind.organizer,
        entity_id="org1",
        affiliation=AffiliationType.team,
        capabilities={"kind": "organizer", "delete_events": True},
    )

    assert isinstance(venue.capabilities, VenueCapabilities)
    assert venue.capabilities.approve_events is True
    assert isinstance(organizer.capabilities, OrganizerCapabilities)
    assert organizer.capabilities.delete_events is True


def test_flags_are_scoped_to_their_entity_kind():
    """An organizer-only flag is never read off a venue record and vice versa."""
    venue = VenueCapabilities(full_admin=True, approve_events=True)
    organizer = OrganizerCapabilities(delete_events=True)

    assert venue.flag("delete_events") is False
    assert organizer.flag("approve_events") is False
    assert organizer.flag("delete_events") is True


def test_full_admin_supersedes_other_flags():
    record = VenueCapabilities(full_admin=True, edit_events=False)

    assert record.flag("edit_events") is False
    assert record.grants("edit_events") is True
    assert record.grants("closeout_event") is True


def test_full_admin_constants_set_every_flag():
    for name in OrganizerCapabilities.flag_names():
        assert FULL_ADMIN_ORGANIZER_CAPABILITIES.flag(name) is True
    for name in VenueCapabilities.flag_names():
        assert FULL_ADMIN_VENUE_CAPABILITIES.flag(name) is True


def test_host_record_only_approves():
    assert VENUE_HOST_CAPABILITIES.approve_events is True
    for name in VenueCapabilities.flag_names():
        if name != "approve_events":
            assert VENUE_HOST_CAPABILITIES.flag(name) is False, name
    assert VENUE_HOST_CAPABILITIES.grants("edit_events") is False


def test_full_access_grant_shorthand():
    assert FULL_ACCESS.full_admin is True
    assert FULL_ACCESS.grants("anything") is True
    assert FULL_ACCESS.model_dump() == {"kind": "full", "full_admin": True}


def test_all_flag_names_covers_both_kinds():
    names = all_flag_names()

    assert "approve_events" in names
    assert "delete_events" in names
    assert "kind" not in names
    assert len(names) == len(set(names))
