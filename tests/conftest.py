"""Shared fixtures for chatrelay tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from chatrelay.main import create_app
from fakes import FakeProvider


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def client(provider):
    with TestClient(create_app(provider)) as test_client:
        yield test_client
