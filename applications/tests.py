"""
Tests for saved cover-letter applications.
"""
import json
from unittest.mock import patch

import pytest
from rest_framework import status

LIST_URL = '/api/applications'


def detail_url(application_id):
    return f'/api/applications/{application_id}'


@pytest.fixture
def application_payload():
    return {
        'applicationName': 'Acme - Backend Engineer',
        'jobDetails': {
            'company': 'Acme',
            'position': 'Backend Engineer',
            'jobDescription': 'Build APIs',
        },
        'generatedContent': {'coverLetter': 'Dear Acme, ...'},
    }


@pytest.fixture
def saved(api_client, redis_client, application_payload):
    response = api_client.post(LIST_URL, application_payload, format='json')
    return response.data['application']


class TestCreateApplication:

    def test_create_writes_record_and_list_entry(self, api_client, redis_client, application_payload):
        response = api_client.post(LIST_URL, application_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True

        application = response.data['application']
        assert application['id']
        assert application['name'] == 'Acme - Backend Engineer'
        assert application['createdAt'] == application['updatedAt']

        record = json.loads(redis_client.get(f"application:{application['id']}"))
        assert record['jobDetails']['jobDescription'] == 'Build APIs'
        assert record['generatedContent'] == {'coverLetter': 'Dear Acme, ...'}

        entry = json.loads(redis_client.get(f"application:list:{application['id']}"))
        assert entry == {
            'id': application['id'],
            'name': 'Acme - Backend Engineer',
            'company': 'Acme',
            'position': 'Backend Engineer',
            'createdAt': application['createdAt'],
        }

    @pytest.mark.parametrize('missing', ['applicationName', 'jobDetails', 'generatedContent'])
    def test_missing_fields(self, api_client, redis_client, application_payload, missing):
        del application_payload[missing]

        response = api_client.post(LIST_URL, application_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Missing required fields'
        assert redis_client.keys('application:*') == []

    def test_storage_failure(self, api_client, redis_client, application_payload):
        with patch('core.kv.KeyValueStore.put', side_effect=ConnectionError("kv down")):
            response = api_client.post(LIST_URL, application_payload, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Failed to save application'


class TestListApplications:

    def test_empty(self, api_client, redis_client):
        response = api_client.get(LIST_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'applications': []}

    def test_newest_first(self, api_client, redis_client):
        redis_client.set('application:list:old', json.dumps(
            {'id': 'old', 'name': 'Old', 'company': '', 'position': '', 'createdAt': '2025-01-01T00:00:00+00:00'}
        ))
        redis_client.set('application:list:new', json.dumps(
            {'id': 'new', 'name': 'New', 'company': '', 'position': '', 'createdAt': '2025-03-01T00:00:00+00:00'}
        ))

        response = api_client.get(LIST_URL)

        assert [a['id'] for a in response.data['applications']] == ['new', 'old']

    def test_list_has_summaries_only(self, api_client, saved):
        response = api_client.get(LIST_URL)

        [entry] = response.data['applications']
        assert entry['id'] == saved['id']
        assert entry['company'] == 'Acme'
        assert 'generatedContent' not in entry


class TestApplicationDetail:

    def test_get(self, api_client, saved):
        response = api_client.get(detail_url(saved['id']))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['application'] == saved

    def test_get_unknown(self, api_client, redis_client):
        response = api_client.get(detail_url('missing'))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Application not found'}

    def test_update_keeps_pair_in_step(self, api_client, redis_client, saved):
        response = api_client.put(
            detail_url(saved['id']),
            {'applicationName': 'Acme - Staff Engineer', 'jobDetails': {'company': 'Acme', 'position': 'Staff'}},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        application = response.data['application']
        assert application['name'] == 'Acme - Staff Engineer'
        assert application['generatedContent'] == saved['generatedContent']
        assert application['createdAt'] == saved['createdAt']

        entry = json.loads(redis_client.get(f"application:list:{saved['id']}"))
        assert entry['name'] == 'Acme - Staff Engineer'
        assert entry['position'] == 'Staff'

    def test_update_unknown(self, api_client, redis_client):
        response = api_client.put(detail_url('missing'), {'applicationName': 'x'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_removes_both_keys(self, api_client, redis_client, saved):
        response = api_client.delete(detail_url(saved['id']))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}
        assert redis_client.keys('application:*') == []

        assert api_client.get(detail_url(saved['id'])).status_code == status.HTTP_404_NOT_FOUND
        assert api_client.get(LIST_URL).data == {'applications': []}
