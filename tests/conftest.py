# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import os

os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from core.errors import EventLookupError, LookupFailure
from models.capabilities import parse_capability_record
from models.enums import EntityKind
from models.event_access import EventRecord


class FakeAccessStore:
    """
    In-memory stand-in for SupabaseAccessStore.

    `fail` holds method names that should raise LookupFailure
    (EventLookupError for get_event). `calls` records every read.
    """

    def __init__(self):
        self.roles = {}
        self.events = {}
        self.creators = {}
        self.teams = {}
        self.fail = set()
        self.calls = []

    # -------------------------------------------------
    # Builders
    # -------------------------------------------------
    def add_event(self, event_id, owner_user_id=None, organizer_id=None, venue_id=None):
        self.events[event_id] = EventRecord(
            id=event_id,
            owner_user_id=owner_user_id,
            organizer_id=organizer_id,
            venue_id=venue_id,
        )
        return self.events[event_id]

    def add_organizer(self, organizer_id, created_by):
        self.creators[(EntityKind.organizer, organizer_id)] = created_by

    def add_venue(self, venue_id, created_by):
        self.creators[(EntityKind.venue, venue_id)] = created_by

    def add_team_member(self, kind, entity_id, user_id, **flags):
        self.teams[(EntityKind(kind), entity_id, user_id)] = parse_capability_record(kind, flags)

    def grant_role(self, user_id, role):
        self.roles.setdefault(user_id, set()).add(role)

    # -------------------------------------------------
    # AccessStore contract
    # -------------------------------------------------
    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail:
            if name == "get_event":
                raise EventLookupError("Event lookup", "connection refused")
            raise LookupFailure(name, "connection refused")

    def get_platform_roles(self, user_id):
        self._maybe_fail("get_platform_roles")
        return set(self.roles.get(user_id, set()))

    def get_event(self, event_id):
        self._maybe_fail("get_event")
        return self.events.get(event_id)

    def get_entity_creator(self, kind, entity_id):
        self._maybe_fail("get_entity_creator")
        return self.creators.get((EntityKind(kind), entity_id))

    def get_team_capability_record(self, kind, entity_id, user_id):
        self._maybe_fail("get_team_capability_record")
        return self.teams.get((EntityKind(kind), entity_id, user_id))


@pytest.fixture
def store() -> FakeAccessStore:
    """Empty in-memory access store."""
    return FakeAccessStore()


@pytest.fixture
def hosted_store(store) -> FakeAccessStore:
    """
    org1 (created by org-creator) runs event ev1 at ven1 (created by
    ven-creator). The event is owned by org-creator.
    """
    store.add_organizer("org1", "org-creator")
    store.add_venue("ven1", "ven-creator")
    store.add_event("ev1", owner_user_id="org-creator", organizer_id="org1", venue_id="ven1")
    return store


@pytest.fixture(scope="function")
def app(store):
    """Create a test FastAPI application wired to the in-memory store."""
    from main import create_app
    from core.access_store import get_access_store

    application = create_app()
    application.dependency_overrides[get_access_store] = lambda: store
    return application


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client with a chainable query builder."""
    mock_client = Mock()
    mock_query = Mock()
    mock_query.select.return_value = mock_query
    mock_query.eq.return_value = mock_query
    mock_query.limit.return_value = mock_query
    mock_client.table.return_value = mock_query
    return mock_client
