"""
Tests for the admin PIN gate.
"""
import pytest
from rest_framework import status

from accounts.cookies import ADMIN_COOKIE_NAME

AUTH_URL = '/api/admin/authenticate'


class TestAdminAuthenticate:

    def test_correct_pin_sets_cookie(self, api_client, settings):
        settings.ADMIN_PIN = '4321'

        response = api_client.post(AUTH_URL, {'pin': '4321'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}

        cookie = response.cookies[ADMIN_COOKIE_NAME]
        assert cookie.value == 'true'
        assert cookie['httponly'] is True
        assert cookie['secure'] is True
        assert cookie['samesite'] == 'Strict'
        assert cookie['max-age'] == 86400

    def test_numeric_pin_is_accepted(self, api_client, settings):
        settings.ADMIN_PIN = '4321'

        response = api_client.post(AUTH_URL, {'pin': 4321}, format='json')

        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.parametrize('body', [{'pin': '0000'}, {'pin': ''}, {'pin': ' 4321'}, {}])
    def test_wrong_pin_is_rejected_without_cookie(self, api_client, settings, body):
        settings.ADMIN_PIN = '4321'

        response = api_client.post(AUTH_URL, body, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid PIN'
        assert ADMIN_COOKIE_NAME not in response.cookies

    def test_unconfigured_pin_is_server_error(self, api_client, settings):
        settings.ADMIN_PIN = ''

        response = api_client.post(AUTH_URL, {'pin': '4321'}, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Admin PIN not configured'
        assert ADMIN_COOKIE_NAME not in response.cookies

    def test_malformed_body(self, api_client, settings):
        settings.ADMIN_PIN = '4321'

        response = api_client.post(AUTH_URL, data='{pin', content_type='application/json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Authentication failed'

    def test_cookie_opens_admin_endpoints(self, api_client, settings, redis_client):
        settings.ADMIN_PIN = '4321'
        api_client.post(AUTH_URL, {'pin': '4321'}, format='json')

        response = api_client.post('/api/analytics/reset')

        assert response.status_code == status.HTTP_200_OK
