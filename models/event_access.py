from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .capabilities import EffectivePermissions, TeamCapabilities
from .enums import AccessSource, AffiliationType, EntityKind, OwningEntity


# -------------------------------------------------
# Event (only the columns permission checks read)
# -------------------------------------------------
class EventRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    owner_user_id: Optional[str] = None
    organizer_id: Optional[str] = None
    venue_id: Optional[str] = None

    # -------------------------------------------------
    # UUIDs from PostgREST → str, "" → None
    # -------------------------------------------------
    @field_validator("id", "owner_user_id", "organizer_id", "venue_id", mode="before")
    def normalize_ids(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    def entity_id(self, kind: EntityKind) -> Optional[str]:
        if EntityKind(kind) == EntityKind.organizer:
            return self.organizer_id
        return self.venue_id


# -------------------------------------------------
# User ↔ organizer/venue relationship
# -------------------------------------------------
class EntityAffiliation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    entity_id: Optional[str] = None
    affiliation: AffiliationType = AffiliationType.none
    capabilities: Optional[
        Annotated[TeamCapabilities, Field(discriminator="kind")]
    ] = None

    # True when a lookup failed before the answer was known
    lookup_failed: bool = False

    @property
    def is_creator(self) -> bool:
        return self.affiliation == AffiliationType.creator

    @property
    def is_team_member(self) -> bool:
        return self.affiliation == AffiliationType.team

    @property
    def is_affiliated(self) -> bool:
        return self.affiliation != AffiliationType.none


# -------------------------------------------------
# Effective permission set handed to callers
# -------------------------------------------------
class AccessResult(BaseModel):
    """
    Outcome of resolving one (user, event) pair.

    `permissions` is the record the projector reads; owners and platform
    admins carry the {full_admin: true} shorthand.
    """

    model_config = ConfigDict(frozen=True)

    has_access: bool = False
    access_source: AccessSource = AccessSource.none
    is_owner: bool = False
    is_platform_admin: bool = False
    is_owning_entity: bool = False
    owning_entity: Optional[OwningEntity] = None
    permissions: Optional[
        Annotated[EffectivePermissions, Field(discriminator="kind")]
    ] = None

    @classmethod
    def denied(cls, owning_entity: Optional[OwningEntity] = None) -> "AccessResult":
        return cls(owning_entity=owning_entity)
