from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ENTITY KIND
# -----------------------------------------------------
class EntityKind(BaseStrEnum):
    """The two kinds of organizing entity an event can belong to."""

    organizer = "organizer"
    venue = "venue"


# -----------------------------------------------------
# OWNING ENTITY
# -----------------------------------------------------
class OwningEntity(BaseStrEnum):
    """Which entity holds administrative authority over an event."""

    organizer = "organizer"
    venue = "venue"
    unknown = "unknown"


# -----------------------------------------------------
# ACCESS SOURCE
# -----------------------------------------------------
class AccessSource(BaseStrEnum):
    """
    The relationship through which a user reaches an event.
    Derived on every check; never stored.
    """

    owner = "owner"
    platform_admin = "platform_admin"
    organizer_creator = "organizer_creator"
    organizer_team = "organizer_team"
    venue_creator = "venue_creator"
    venue_team = "venue_team"
    venue_host = "venue_host"  # non-owning venue, approve only
    none = "none"


# -----------------------------------------------------
# AFFILIATION
# -----------------------------------------------------
class AffiliationType(BaseStrEnum):
    """How a user relates to a single organizer or venue."""

    creator = "creator"
    team = "team"
    none = "none"
