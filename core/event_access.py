# core/event_access.py

"""
Access source resolution for a (user, event) pair.

Sources are tried in a fixed order and the first one that matches wins:

    owner / platform admin
    organizer creator → organizer team
    venue creator → venue team   (reduced to host rights when the venue
                                  does not own the event)
    none

Nothing is cached between calls; every check reads the store again so
team and ownership changes apply on the next request.
"""

from typing import Callable, Dict, List, Optional

from core.access_store import AccessStore, get_access_store
from core.config import settings
from core.entity_affiliation import get_entity_affiliation
from core.errors import LookupFailure
from core.logging_config import logger
from core.owning_entity import classify_owner
from models.capabilities import (
    FULL_ACCESS,
    FULL_ADMIN_ORGANIZER_CAPABILITIES,
    FULL_ADMIN_VENUE_CAPABILITIES,
    VENUE_HOST_CAPABILITIES,
)
from models.enums import AccessSource, EntityKind, OwningEntity
from models.event_access import AccessResult, EntityAffiliation, EventRecord


# ============================================================
# Per-call state (lives for one resolve_access call only)
# ============================================================
class _Resolution:
    def __init__(self, store: AccessStore, user_id: str, event: EventRecord):
        self.store = store
        self.user_id = user_id
        self.event = event
        self._owning_entity: Optional[OwningEntity] = None
        self._affiliations: Dict[EntityKind, EntityAffiliation] = {}

    @property
    def owning_entity(self) -> OwningEntity:
        # classified at most once per resolution
        if self._owning_entity is None:
            self._owning_entity = classify_owner(self.event, self.store)
        return self._owning_entity

    @property
    def known_owning_entity(self) -> Optional[OwningEntity]:
        return self._owning_entity

    def affiliation(self, kind: EntityKind) -> EntityAffiliation:
        if kind not in self._affiliations:
            self._affiliations[kind] = get_entity_affiliation(
                self.store, kind, self.event.entity_id(kind), self.user_id
            )
        return self._affiliations[kind]

    def granted(self, source: AccessSource, permissions, *, is_owning_entity: bool, **flags) -> AccessResult:
        return AccessResult(
            has_access=True,
            access_source=source,
            is_owning_entity=is_owning_entity,
            owning_entity=self._owning_entity,
            permissions=permissions,
            **flags,
        )


AccessSourceResolver = Callable[[_Resolution], Optional[AccessResult]]


# ============================================================
# Access sources, highest precedence first
# ============================================================
def _platform_admin_source(r: _Resolution) -> Optional[AccessResult]:
    try:
        roles = r.store.get_platform_roles(r.user_id)
    except LookupFailure as e:
        logger.warning(f"Skipping platform admin check for {r.user_id}: {e}")
        return None

    if roles.isdisjoint(settings.PLATFORM_ADMIN_ROLES):
        return None

    # Administrative override ignores entity topology entirely
    return r.granted(
        AccessSource.platform_admin,
        FULL_ACCESS,
        is_owning_entity=True,
        is_platform_admin=True,
    )


def _owner_source(r: _Resolution) -> Optional[AccessResult]:
    if r.event.owner_user_id != r.user_id:
        return None
    return r.granted(AccessSource.owner, FULL_ACCESS, is_owning_entity=True, is_owner=True)


def _organizer_source(r: _Resolution) -> Optional[AccessResult]:
    if not r.event.organizer_id:
        return None

    organizer = r.affiliation(EntityKind.organizer)
    if not organizer.is_affiliated:
        return None

    owns = r.owning_entity == OwningEntity.organizer

    # Organizer creators keep full capability even when the organizer is
    # not the classified owner.
    if organizer.is_creator:
        return r.granted(
            AccessSource.organizer_creator,
            FULL_ADMIN_ORGANIZER_CAPABILITIES,
            is_owning_entity=owns,
        )

    return r.granted(
        AccessSource.organizer_team,
        organizer.capabilities,
        is_owning_entity=owns,
    )


def _venue_source(r: _Resolution) -> Optional[AccessResult]:
    if not r.event.venue_id:
        return None

    venue = r.affiliation(EntityKind.venue)
    if not venue.is_affiliated:
        return None

    if r.owning_entity != OwningEntity.venue:
        # Hosting someone else's event: approve only. A stored team record
        # is discarded, not merged.
        return r.granted(
            AccessSource.venue_host,
            VENUE_HOST_CAPABILITIES,
            is_owning_entity=False,
        )

    if venue.is_creator:
        return r.granted(
            AccessSource.venue_creator,
            FULL_ADMIN_VENUE_CAPABILITIES,
            is_owning_entity=True,
        )

    return r.granted(
        AccessSource.venue_team,
        venue.capabilities,
        is_owning_entity=True,
    )


ACCESS_SOURCES: List[AccessSourceResolver] = [
    _platform_admin_source,
    _owner_source,
    _organizer_source,
    _venue_source,
]


# ============================================================
# Public entry point
# ============================================================
def resolve_access(
    user_id: str,
    event_id: str,
    store: Optional[AccessStore] = None,
) -> AccessResult:
    """
    Work out how (and whether) `user_id` reaches `event_id`.

    A missing event or user resolves to no access. Sub-lookup failures
    skip the affected source. A failed event lookup raises
    EventLookupError since nothing about the event is known.
    """
    if not user_id or not event_id:
        return AccessResult.denied()

    store = store or get_access_store()

    event = store.get_event(event_id)
    if event is None:
        logger.debug(f"Event {event_id} not found, denying {user_id}")
        return AccessResult.denied()

    resolution = _Resolution(store, user_id, event)

    for source in ACCESS_SOURCES:
        result = source(resolution)
        if result is not None:
            logger.debug(
                f"Access for {user_id} on event {event_id}: "
                f"{result.access_source} (owning_entity={result.is_owning_entity})"
            )
            return result

    logger.debug(f"No access for {user_id} on event {event_id}")
    return AccessResult.denied(owning_entity=resolution.known_owning_entity)
