# routers/event_access.py

from fastapi import APIRouter, Depends, HTTPException

from core.access_store import AccessStore, get_access_store
from core.errors import EventLookupError, handle_lookup_error
from core.event_access import resolve_access
from core.event_permissions import has_permission, requires_event_permission
from dependencies.auth import CurrentUser, get_current_user
from models.capabilities import all_flag_names
from models.event_access import AccessResult


router = APIRouter(
    prefix="/events",
    tags=["Event Access"],
)


# -----------------------------------------------------
# GET /events/{event_id}/access
# Full access detail for permission badges in the UI
# -----------------------------------------------------
@router.get("/{event_id}/access", response_model=AccessResult, summary="Resolve event access")
def get_event_access(
    event_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: AccessStore = Depends(get_access_store),
):
    try:
        return resolve_access(current_user.id, event_id, store)
    except EventLookupError as e:
        raise handle_lookup_error(e)


# -----------------------------------------------------
# GET /events/{event_id}/permissions/{flag}
# -----------------------------------------------------
@router.get("/{event_id}/permissions/{flag}", summary="Check one event permission")
def check_event_permission(
    event_id: str,
    flag: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: AccessStore = Depends(get_access_store),
):
    if flag not in all_flag_names():
        raise HTTPException(400, f"Unknown permission '{flag}'")

    try:
        access = resolve_access(current_user.id, event_id, store)
    except EventLookupError as e:
        raise handle_lookup_error(e)

    return {
        "event_id": event_id,
        "permission": flag,
        "allowed": has_permission(access, flag),
        "access_source": access.access_source,
    }


# -----------------------------------------------------
# GET /events/{event_id}/settings-access
# 200 when the caller may open event settings, else 403
# -----------------------------------------------------
@router.get(
    "/{event_id}/settings-access",
    summary="Guard for the event settings screen",
)
def event_settings_access(
    event_id: str,
    current_user: CurrentUser = Depends(requires_event_permission("view_settings")),
):
    return {"event_id": event_id, "allowed": True}
