from typing import Optional

from fastapi import Depends, HTTPException

from core.access_store import AccessStore, get_access_store
from core.errors import EventLookupError
from core.event_access import resolve_access
from core.logging_config import logger
from dependencies.auth import CurrentUser, get_current_user
from models.enums import AccessSource
from models.event_access import AccessResult


HOST_FLAG = "approve_events"


# -----------------------------------------------------
# Projection: access result + flag → yes/no
# -----------------------------------------------------
def has_permission(access: AccessResult, flag: str) -> bool:
    if not access.has_access:
        return False

    # Owner, platform admin and organizer creator pass every check
    if access.is_owner or access.access_source == AccessSource.platform_admin:
        return True
    if access.access_source == AccessSource.organizer_creator:
        return True

    # Venue creators only when their venue owns the event
    if access.access_source == AccessSource.venue_creator and access.is_owning_entity:
        return True

    if access.access_source == AccessSource.venue_host:
        return flag == HOST_FLAG

    permissions = access.permissions
    if permissions is None:
        return False

    # full_admin only supersedes on the owning entity's events
    if permissions.full_admin and access.is_owning_entity:
        return True

    return permissions.flag(flag)


# -----------------------------------------------------
# Resolve + project in one call
# -----------------------------------------------------
def has_event_permission(
    user_id: str,
    event_id: str,
    flag: str,
    store: Optional[AccessStore] = None,
) -> bool:
    """
    Boolean permission check. A failed event lookup is logged and
    answered with False.
    """
    try:
        access = resolve_access(user_id, event_id, store)
    except EventLookupError as e:
        logger.error(f"Denying {flag} on event {event_id} for {user_id}: {e}")
        return False

    return has_permission(access, flag)


# ============================================================
# QUERY FACADE
# ============================================================

def can_edit_event(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    return has_event_permission(user_id, event_id, "edit_events", store)


def can_closeout_event(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    return has_event_permission(user_id, event_id, "closeout_event", store)


def can_manage_door_staff(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    return has_event_permission(user_id, event_id, "manage_door_staff", store)


def can_view_financials(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    return has_event_permission(user_id, event_id, "view_financials", store)


def can_manage_event_promoters(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    return has_event_permission(user_id, event_id, "manage_promoters", store)


def can_access_event_settings(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    return has_event_permission(user_id, event_id, "view_settings", store)


def can_approve_event(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    return has_event_permission(user_id, event_id, HOST_FLAG, store)


def can_publish_event_photos(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    return has_event_permission(user_id, event_id, "publish_photos", store)


def is_event_owner(user_id: str, event_id: str, store: Optional[AccessStore] = None) -> bool:
    """
    Owner or platform admin (e.g. for ownership transfer). Capability
    flags never make someone an owner.
    """
    try:
        access = resolve_access(user_id, event_id, store)
    except EventLookupError as e:
        logger.error(f"Denying ownership check on event {event_id} for {user_id}: {e}")
        return False

    return access.is_owner or access.access_source == AccessSource.platform_admin


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_event_permission(flag: str):
    """
    Usage:
        @router.post(
            "/{event_id}/closeout",
            dependencies=[Depends(requires_event_permission("closeout_event"))],
        )
    """

    def dependency(
        event_id: str,
        current_user: CurrentUser = Depends(get_current_user),
        store: AccessStore = Depends(get_access_store),
    ):
        if not has_event_permission(current_user.id, event_id, flag, store):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{flag}' required on this event",
            )
        return current_user

    return dependency
