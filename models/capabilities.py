from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

from .enums import EntityKind


# -------------------------------------------------
# Shared flags (present on both organizer and venue records)
# -------------------------------------------------
class CapabilityRecordBase(BaseModel):
    """
    Boolean permission bundle attached to a team membership.

    Stored rows may be partial or carry stale keys: absent flags read as
    False and unknown keys are dropped.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    full_admin: bool = False
    manage_users: bool = False
    edit_profile: bool = False
    add_events: bool = False
    edit_events: bool = False
    manage_promoters: bool = False
    view_reports: bool = False
    manage_door_staff: bool = False
    view_financials: bool = False
    closeout_event: bool = False
    view_settings: bool = False
    publish_photos: bool = False
    manage_guests: bool = False

    # -------------------------------------------------
    # Only a stored JSON true grants a flag.
    # null, "yes", 1 and the like all read as False.
    # -------------------------------------------------
    @model_validator(mode="before")
    @classmethod
    def non_bool_is_false(cls, data):
        if not isinstance(data, dict):
            return data
        flags = cls.flag_names()
        return {
            key: (value if key not in flags or isinstance(value, bool) else False)
            for key, value in data.items()
        }

    @classmethod
    def flag_names(cls) -> list[str]:
        return [name for name in cls.model_fields if name != "kind"]

    def flag(self, name: str) -> bool:
        """Raw stored value. Flags outside this record's schema are False."""
        if name not in self.flag_names():
            return False
        return getattr(self, name) is True

    def grants(self, name: str) -> bool:
        """Stored value with full_admin superseding every other flag."""
        if self.full_admin:
            return True
        return self.flag(name)


# -------------------------------------------------
# Organizer-flavored record
# -------------------------------------------------
class OrganizerCapabilities(CapabilityRecordBase):
    kind: Literal["organizer"] = "organizer"

    delete_events: bool = False


# -------------------------------------------------
# Venue-flavored record
# -------------------------------------------------
class VenueCapabilities(CapabilityRecordBase):
    kind: Literal["venue"] = "venue"

    approve_events: bool = False


# -------------------------------------------------
# {full_admin: true} shorthand for owners and platform admins
# -------------------------------------------------
class FullAccessGrant(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["full"] = "full"
    full_admin: Literal[True] = True

    def flag(self, name: str) -> bool:
        return True

    def grants(self, name: str) -> bool:
        return True


TeamCapabilities = Union[OrganizerCapabilities, VenueCapabilities]

EffectivePermissions = Union[OrganizerCapabilities, VenueCapabilities, FullAccessGrant]

_RECORD_TYPES = {
    EntityKind.organizer: OrganizerCapabilities,
    EntityKind.venue: VenueCapabilities,
}


def capability_model_for(kind: EntityKind) -> type[CapabilityRecordBase]:
    return _RECORD_TYPES[EntityKind(kind)]


def parse_capability_record(kind: EntityKind, raw: Optional[dict]) -> Optional[TeamCapabilities]:
    """
    Build the record for `kind` from a stored permissions JSON blob.
    Returns None when there is no blob.
    """
    if raw is None:
        return None
    data = {k: v for k, v in dict(raw).items() if k != "kind"}
    return capability_model_for(kind).model_validate(data)


def all_flag_names() -> list[str]:
    """Every flag any record kind knows about (for request validation)."""
    names = []
    for model in _RECORD_TYPES.values():
        for name in model.flag_names():
            if name not in names:
                names.append(name)
    return names


# =====================================================
# NAMED CAPABILITY RECORDS
# =====================================================
FULL_ADMIN_ORGANIZER_CAPABILITIES = OrganizerCapabilities(
    **{name: True for name in OrganizerCapabilities.flag_names()}
)

FULL_ADMIN_VENUE_CAPABILITIES = VenueCapabilities(
    **{name: True for name in VenueCapabilities.flag_names()}
)

# A venue hosting an event it does not own may approve it and nothing else.
VENUE_HOST_CAPABILITIES = VenueCapabilities(approve_events=True)

FULL_ACCESS = FullAccessGrant()


def full_capabilities_for(kind: EntityKind) -> TeamCapabilities:
    if EntityKind(kind) == EntityKind.organizer:
        return FULL_ADMIN_ORGANIZER_CAPABILITIES
    return FULL_ADMIN_VENUE_CAPABILITIES
