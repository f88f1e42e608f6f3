# core/access_store.py

from typing import Optional, Protocol, Set

from core.errors import lookup_failure
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.capabilities import TeamCapabilities, parse_capability_record
from models.enums import EntityKind
from models.event_access import EventRecord


# ============================================================
# Read contract the permission engine depends on
# ============================================================
class AccessStore(Protocol):
    """
    Every method may raise LookupFailure (EventLookupError for get_event).
    "Not found" is a None / empty return, never an exception.
    """

    def get_platform_roles(self, user_id: str) -> Set[str]: ...

    def get_event(self, event_id: str) -> Optional[EventRecord]: ...

    def get_entity_creator(self, kind: EntityKind, entity_id: str) -> Optional[str]: ...

    def get_team_capability_record(
        self, kind: EntityKind, entity_id: str, user_id: str
    ) -> Optional[TeamCapabilities]: ...


# Supabase table layout per entity kind
ENTITY_TABLES = {
    EntityKind.organizer: "organizers",
    EntityKind.venue: "venues",
}

TEAM_TABLES = {
    EntityKind.organizer: ("organizer_users", "organizer_id"),
    EntityKind.venue: ("venue_users", "venue_id"),
}


# ============================================================
# Supabase-backed store
# ============================================================
class SupabaseAccessStore:
    """Reads roles, events and team memberships through PostgREST."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    # -----------------------------------------------------
    # user_roles
    # -----------------------------------------------------
    def get_platform_roles(self, user_id: str) -> Set[str]:
        try:
            result = (
                self.client.table("user_roles")
                .select("role")
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            raise lookup_failure(e, "Platform role lookup") from e

        return {row["role"] for row in (result.data or []) if row.get("role")}

    # -----------------------------------------------------
    # events
    # -----------------------------------------------------
    def get_event(self, event_id: str) -> Optional[EventRecord]:
        try:
            result = (
                self.client.table("events")
                .select("id, owner_user_id, organizer_id, venue_id")
                .eq("id", event_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise lookup_failure(e, "Event lookup", event=True) from e

        if not result.data:
            return None

        return EventRecord.model_validate(result.data[0])

    # -----------------------------------------------------
    # organizers / venues → created_by
    # -----------------------------------------------------
    def get_entity_creator(self, kind: EntityKind, entity_id: str) -> Optional[str]:
        table = ENTITY_TABLES[EntityKind(kind)]
        try:
            result = (
                self.client.table(table)
                .select("created_by")
                .eq("id", entity_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise lookup_failure(e, f"{kind} creator lookup") from e

        if not result.data:
            return None

        created_by = result.data[0].get("created_by")
        return str(created_by) if created_by else None

    # -----------------------------------------------------
    # organizer_users / venue_users → permissions JSON
    # -----------------------------------------------------
    def get_team_capability_record(
        self, kind: EntityKind, entity_id: str, user_id: str
    ) -> Optional[TeamCapabilities]:
        table, entity_column = TEAM_TABLES[EntityKind(kind)]
        try:
            result = (
                self.client.table(table)
                .select("permissions")
                .eq(entity_column, entity_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise lookup_failure(e, f"{kind} team lookup") from e

        if not result.data:
            return None

        raw = result.data[0].get("permissions")
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning(
                    f"Ignoring non-object permissions on {table} "
                    f"({entity_column}={entity_id}, user_id={user_id})"
                )
            return None

        return parse_capability_record(kind, raw)


def get_access_store() -> AccessStore:
    """Default store for request handlers and the query facade."""
    return SupabaseAccessStore()
