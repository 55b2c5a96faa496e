"""Pytest configuration and shared fixtures for all tests."""

import os

# Keep the API module from touching a real database file on import
os.environ.setdefault("REWARDS_DB_PATH", ":memory:")

import pytest
from fastapi.testclient import TestClient

from rewards_program.data.db import RewardsDB
from rewards_program.interfaces.api import app, get_reward_service
from rewards_program.services.reward_service import RewardService


@pytest.fixture
def db():
    """Fresh in-memory store per test."""
    store = RewardsDB(":memory:")
    yield store
    store.close()


@pytest.fixture
def service(db) -> RewardService:
    return RewardService(db)


@pytest.fixture
def client(service):
    """
    Test client whose routes all share the `service` fixture, so tests can
    seed data through the service and read it back over HTTP.
    """
    app.dependency_overrides[get_reward_service] = lambda: service
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def jane(service):
    return service.create_customer("Jane")
