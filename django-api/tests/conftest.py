"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from helpers import make_playground
from playgrounds.domain import Playground
from playgrounds.stores import MemoryPlaygroundStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store() -> MemoryPlaygroundStore:
    return MemoryPlaygroundStore()


@pytest.fixture
def playground(store: MemoryPlaygroundStore) -> Playground:
    return make_playground(store)
