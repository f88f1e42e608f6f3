# core/owning_entity.py

from core.access_store import AccessStore
from core.entity_affiliation import get_entity_affiliation
from core.logging_config import logger
from models.enums import EntityKind, OwningEntity
from models.event_access import EventRecord


def classify_owner(event: EventRecord, store: AccessStore) -> OwningEntity:
    """
    Decide which of the event's organizer / venue owns it for permission
    inheritance.

    - Legacy events (no owner_user_id): organizer if set, else venue,
      else unknown.
    - Otherwise the entity the owner is affiliated with, organizer first.
    - An owner unaffiliated with both → unknown.

    If an affiliation lookup fails before the answer is settled the
    result is unknown: a failed organizer check must not hand ownership
    to the venue.
    """
    if not event.owner_user_id:
        if event.organizer_id:
            return OwningEntity.organizer
        if event.venue_id:
            return OwningEntity.venue
        return OwningEntity.unknown

    # Organizer affiliation is checked first and wins ties.
    if event.organizer_id:
        organizer = get_entity_affiliation(
            store, EntityKind.organizer, event.organizer_id, event.owner_user_id
        )
        if organizer.is_affiliated:
            return OwningEntity.organizer
        if organizer.lookup_failed:
            logger.warning(
                f"Owning entity for event {event.id} unresolved: organizer lookup failed"
            )
            return OwningEntity.unknown

    if event.venue_id:
        venue = get_entity_affiliation(
            store, EntityKind.venue, event.venue_id, event.owner_user_id
        )
        if venue.is_affiliated:
            return OwningEntity.venue

    return OwningEntity.unknown
