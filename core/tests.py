"""
Tests for the key-value store and API error shape.
"""
import pytest
from rest_framework import status
from rest_framework.exceptions import ValidationError, NotFound

from core.exceptions import api_exception_handler
from core.kv import escape_glob


class TestKeyValueStore:

    def test_put_get_delete(self, kv_store):
        kv_store.put('application:1', '{"id": "1"}')

        assert kv_store.get('application:1') == '{"id": "1"}'
        assert kv_store.exists('application:1') is True

        kv_store.delete('application:1')

        assert kv_store.get('application:1') is None
        assert kv_store.exists('application:1') is False

    def test_put_with_ttl(self, kv_store, redis_client):
        kv_store.put('contact:delivered:abc', '1', ttl=60)

        assert 0 < redis_client.ttl('contact:delivered:abc') <= 60

    def test_incr(self, kv_store):
        assert kv_store.incr('analytics:page:2025-06-10:/') == 1
        assert kv_store.incr('analytics:page:2025-06-10:/') == 2

    def test_list_keys_by_prefix(self, kv_store):
        kv_store.put('analytics:page:2025-06-10:/', '1')
        kv_store.put('analytics:page:2025-06-10:/about', '1')
        kv_store.put('analytics:page:2025-06-11:/', '1')
        kv_store.put('application:1', '{}')

        keys = kv_store.list_keys('analytics:page:2025-06-10:')

        assert sorted(keys) == ['analytics:page:2025-06-10:/', 'analytics:page:2025-06-10:/about']

    def test_list_keys_treats_prefix_literally(self, kv_store):
        kv_store.put('analytics:page:*', '1')
        kv_store.put('analytics:page:x', '1')

        assert kv_store.list_keys('analytics:page:*') == ['analytics:page:*']

    def test_delete_prefix(self, kv_store, redis_client):
        kv_store.put('analytics:recent', '[]')
        kv_store.put('analytics:event:1', '{}')
        kv_store.put('application:1', '{}')

        assert kv_store.delete_prefix('analytics:') == 2
        assert redis_client.keys('*') == ['application:1']

    @pytest.mark.parametrize('raw,escaped', [
        ('analytics:', 'analytics:'),
        ('a*b', 'a\\*b'),
        ('[x]?', '\\[x\\]\\?'),
    ])
    def test_escape_glob(self, raw, escaped):
        assert escape_glob(raw) == escaped


class TestApiExceptionHandler:

    def test_detail_becomes_error(self):
        response = api_exception_handler(NotFound('Application not found'), {})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'success': False, 'error': 'Application not found'}

    def test_field_errors_are_kept(self):
        response = api_exception_handler(ValidationError({'pin': ['This field is required.']}), {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['fields'] == {'pin': ['This field is required.']}

    def test_unhandled_exceptions_pass_through(self):
        assert api_exception_handler(RuntimeError('boom'), {}) is None

    def test_unknown_route_method(self, api_client, redis_client):
        response = api_client.delete('/api/analytics/summary')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert response.data['success'] is False
