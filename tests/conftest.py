"""Pytest fixtures for storefront tests."""

import pytest

from tests.helpers import FakeCatalogClient, ManualScheduler


@pytest.fixture
def scheduler():
    """Scheduler driven by virtual milliseconds."""
    return ManualScheduler()


@pytest.fixture
def fake_client():
    return FakeCatalogClient()
