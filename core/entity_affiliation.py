# core/entity_affiliation.py

"""
How a user relates to one organizer or venue: creator, team member
(with a capability record), or nothing.
"""

from typing import Optional

from core.access_store import AccessStore, get_access_store
from core.errors import LookupFailure
from core.logging_config import logger
from models.enums import AffiliationType, EntityKind
from models.event_access import EntityAffiliation
from models.capabilities import full_capabilities_for


def get_entity_affiliation(
    store: AccessStore,
    kind: EntityKind,
    entity_id: Optional[str],
    user_id: str,
) -> EntityAffiliation:
    """
    Creator wins over team membership. A team row without a stored
    permissions record does not count as membership.

    Lookup failures are not raised: the failed check is treated as
    non-matching and `lookup_failed` is set on the result.
    """
    kind = EntityKind(kind)
    if not entity_id:
        return EntityAffiliation(kind=kind)

    lookup_failed = False

    try:
        creator_id = store.get_entity_creator(kind, entity_id)
    except LookupFailure as e:
        logger.warning(f"Treating {kind} {entity_id} creator as unknown: {e}")
        creator_id = None
        lookup_failed = True

    if creator_id and creator_id == user_id:
        return EntityAffiliation(
            kind=kind,
            entity_id=entity_id,
            affiliation=AffiliationType.creator,
            capabilities=full_capabilities_for(kind),
        )

    try:
        record = store.get_team_capability_record(kind, entity_id, user_id)
    except LookupFailure as e:
        logger.warning(f"Treating {kind} {entity_id} team membership as absent: {e}")
        record = None
        lookup_failed = True

    if record is not None:
        return EntityAffiliation(
            kind=kind,
            entity_id=entity_id,
            affiliation=AffiliationType.team,
            capabilities=record,
        )

    return EntityAffiliation(kind=kind, entity_id=entity_id, lookup_failed=lookup_failed)


# ============================================================
# Entity-level permission check (team management screens etc.)
# ============================================================
def has_entity_permission(
    user_id: str,
    kind: EntityKind,
    entity_id: str,
    flag: str,
    store: Optional[AccessStore] = None,
) -> bool:
    """
    Whether `user_id` holds `flag` on the organizer/venue itself.
    Creators pass every flag; team members pass through their record
    (full_admin supersedes); everyone else fails.
    """
    store = store or get_access_store()
    affiliation = get_entity_affiliation(store, kind, entity_id, user_id)

    if affiliation.is_creator:
        return True
    if affiliation.is_team_member and affiliation.capabilities is not None:
        return affiliation.capabilities.grants(flag)
    return False
