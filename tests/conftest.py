"""Shared fixtures for the test suite."""

import mongomock
import pytest
from fastapi.testclient import TestClient

from api.data_access import CompanyDataProvider
from api.main import create_app


@pytest.fixture
def provider():
    """Open CompanyDataProvider backed by an in-memory mongomock client."""
    data = CompanyDataProvider(
        database_name="test",
        collection_name="companies",
        client=mongomock.MongoClient(),
    ).open()
    yield data
    data.close()


@pytest.fixture
def collection(provider):
    """The companies collection behind `provider`, for seeding fixtures."""
    return provider.collection


@pytest.fixture
def api(provider):
    """TestClient around an app sharing `provider`."""
    with TestClient(create_app(provider)) as client:
        yield client


@pytest.fixture
def sample_company():
    """Factory fixture. Call with overrides to get a company document."""
    def _make(**overrides):
        company = {
            "name": "Acme Corp",
            "location": "Bangalore",
            "headcount": 1200,
            "salaryBand": {"base": 1500000, "bonus": 200000},
            "benefits": ["Health Insurance", "Remote Work", "Stock Options"],
            "hiringCriteria": {"skills": ["Python", "JavaScript", "SQL", "Docker"]},
        }
        company.update(overrides)
        return company
    return _make

