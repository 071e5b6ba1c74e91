"""
Shared pytest fixtures.
"""
import fakeredis
import pytest
from rest_framework.test import APIClient

from core.kv import KeyValueStore


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def redis_client(monkeypatch):
    """In-process Redis used by every get_kv_store() call during the test."""
    client = fakeredis.FakeRedis(decode_responses=True)
    client.flushall()
    monkeypatch.setattr('core.kv.get_redis_client', lambda: client)
    yield client
    client.flushall()


@pytest.fixture
def kv_store(redis_client):
    return KeyValueStore(redis_client)


@pytest.fixture
def admin_client(api_client):
    """API client carrying the admin cookie."""
    api_client.cookies['admin_authenticated'] = 'true'
    return api_client
