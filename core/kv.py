"""
Key-Value Store

Thin wrapper around a Redis client used for the analytics and saved
application namespaces. Values are stored as strings; callers encode JSON
themselves.

Usage:
    from core.kv import get_kv_store
    store = get_kv_store()
    store.put('application:123', json.dumps(record))
    for key in store.list_keys('analytics:'):
        ...
"""
import re
import logging

import redis
from django.conf import settings

logger = logging.getLogger(__name__)

# Characters with a meaning in Redis glob patterns
_GLOB_SPECIAL = re.compile(r'([*?\[\]\\])')


def escape_glob(value):
    """Escape a literal prefix so it can be used in a SCAN MATCH pattern."""
    return _GLOB_SPECIAL.sub(r'\\\1', value)


class KeyValueStore:
    """
    String key-value operations with prefix listing.

    The client is injected so tests can pass a fakeredis instance.
    """

    def __init__(self, client):
        self.client = client

    def get(self, key):
        value = self.client.get(key)
        if isinstance(value, bytes):
            return value.decode('utf-8')
        return value

    def put(self, key, value, ttl=None):
        if ttl:
            self.client.set(key, value, ex=ttl)
        else:
            self.client.set(key, value)

    def delete(self, key):
        self.client.delete(key)

    def exists(self, key) -> bool:
        return bool(self.client.exists(key))

    def incr(self, key) -> int:
        """Atomic increment (used when ANALYTICS_ATOMIC_COUNTERS is on)."""
        return int(self.client.incr(key))

    def list_keys(self, prefix):
        """Return every key starting with ``prefix``."""
        keys = []
        for key in self.client.scan_iter(match=f"{escape_glob(prefix)}*", count=500):
            if isinstance(key, bytes):
                key = key.decode('utf-8')
            keys.append(key)
        return keys

    def delete_prefix(self, prefix) -> int:
        """Delete every key under ``prefix`` and return how many were removed."""
        keys = self.list_keys(prefix)
        for key in keys:
            self.client.delete(key)
        logger.info(f"Deleted {len(keys)} keys under '{prefix}'")
        return len(keys)


def get_redis_client():
    """Build a Redis client for the key-value namespaces."""
    return redis.Redis.from_url(settings.KV_REDIS_URL, decode_responses=True)


def get_kv_store() -> KeyValueStore:
    """Return a store bound to the configured Redis database."""
    return KeyValueStore(get_redis_client())
