# -------------------------
# Enums
# -------------------------
from .enums import (
    AccessSource,
    AffiliationType,
    EntityKind,
    OwningEntity,
)

# -------------------------
# Capability Records
# -------------------------
from .capabilities import (
    CapabilityRecordBase,
    OrganizerCapabilities,
    VenueCapabilities,
    FullAccessGrant,
    TeamCapabilities,
    EffectivePermissions,
    FULL_ACCESS,
    FULL_ADMIN_ORGANIZER_CAPABILITIES,
    FULL_ADMIN_VENUE_CAPABILITIES,
    VENUE_HOST_CAPABILITIES,
    parse_capability_record,
    full_capabilities_for,
    all_flag_names,
)

# -------------------------
# Event Access Models
# -------------------------
from .event_access import (
    EventRecord,
    EntityAffiliation,
    AccessResult,
)
