"""
Tests for visit analytics: event storage, counters, summary and reset.
"""
import json
from datetime import timedelta
from unittest.mock import patch

import pytest
from django.utils import timezone
from rest_framework import status

from analytics.events import create_event, EVENT_TYPES
from analytics.services import AnalyticsService, RECENT_KEY, utc_day
from analytics.session import is_trackable_page, SESSION_COOKIE_NAME

TRACK_URL = '/api/analytics/track'
SUMMARY_URL = '/api/analytics/summary'
RESET_URL = '/api/analytics/reset'


@pytest.fixture
def service(kv_store):
    return AnalyticsService(store=kv_store)


def recent(redis_client):
    return json.loads(redis_client.get(RECENT_KEY) or '[]')


class TestEvents:

    def test_create_event_assigns_id_and_timestamp(self):
        event = create_event('download', '/about', 'resume_download', 'sess-1')

        assert event['id']
        assert event['timestamp'] > 0
        assert event['type'] == 'download'
        assert event['action'] == 'resume_download'
        assert event['sessionId'] == 'sess-1'

    def test_event_ids_are_unique(self):
        assert create_event('page_view', '/')['id'] != create_event('page_view', '/')['id']

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            create_event('scroll', '/')

    @pytest.mark.parametrize('path,trackable', [
        ('/', True),
        ('/about', True),
        ('/administrator-tips', True),
        ('/admin', False),
        ('/admin/', False),
        ('/admin/applications', False),
    ])
    def test_admin_pages_are_not_trackable(self, path, trackable):
        assert is_trackable_page(path) is trackable


class TestRecordEvent:

    def test_raw_event_is_stored(self, service, redis_client):
        event = create_event('page_view', '/about')

        assert service.record_event(event) is True

        stored = json.loads(redis_client.get(f"analytics:event:{event['id']}"))
        assert stored == event

    def test_page_view_counter_counts_exactly(self, service, redis_client):
        for _ in range(7):
            service.record_event(create_event('page_view', '/portfolio'))

        assert redis_client.get(f"analytics:page:{utc_day()}:/portfolio") == '7'

    def test_atomic_counters(self, service, redis_client, settings):
        settings.ANALYTICS_ATOMIC_COUNTERS = True
        atomic = AnalyticsService(store=service.store)

        for _ in range(3):
            atomic.record_event(create_event('page_view', '/'))

        assert redis_client.get(f"analytics:page:{utc_day()}:/") == '3'

    @pytest.mark.parametrize('event_type', ['download', 'contact_click', 'navigation_click'])
    def test_action_counter_uses_action_label(self, service, redis_client, event_type):
        service.record_event(create_event(event_type, '/', 'email_click'))
        service.record_event(create_event(event_type, '/', 'email_click'))

        assert redis_client.get(f"analytics:action:{utc_day()}:email_click") == '2'
        assert not redis_client.keys('analytics:page:*')

    def test_action_counter_falls_back_to_type(self, service, redis_client):
        service.record_event(create_event('download', '/'))

        assert redis_client.get(f"analytics:action:{utc_day()}:download") == '1'

    def test_page_view_does_not_touch_action_counters(self, service, redis_client):
        service.record_event(create_event('page_view', '/', 'hero_view'))

        assert not redis_client.keys('analytics:action:*')

    def test_recent_list_is_capped_newest_first(self, service, redis_client):
        events = [create_event('page_view', f'/page-{i}') for i in range(51)]
        for event in events:
            service.record_event(event)

        stored = recent(redis_client)
        assert len(stored) == 50
        assert stored[0]['id'] == events[-1]['id']
        assert stored[-1]['id'] == events[1]['id']
        assert events[0]['id'] not in {e['id'] for e in stored}

    def test_storage_errors_are_swallowed(self, service):
        with patch.object(service.store, 'put', side_effect=ConnectionError("kv down")):
            assert service.record_event(create_event('page_view', '/')) is False


class TestSummary:

    def test_empty_store(self, service):
        summary = service.get_summary()

        assert summary['totalPageViews'] == 0
        assert summary['topPages'] == []
        assert summary['recentActivity'] == []

    def test_totals_count_recent_events_by_type(self, service):
        for event_type, count in [('page_view', 3), ('download', 2), ('contact_click', 1), ('navigation_click', 4)]:
            for _ in range(count):
                service.record_event(create_event(event_type, '/'))

        summary = service.get_summary()

        assert summary['totalPageViews'] == 3
        assert summary['totalDownloads'] == 2
        assert summary['totalContactClicks'] == 1
        assert summary['totalNavigationClicks'] == 4

    def test_top_pages_sum_last_seven_days(self, service, redis_client):
        now = timezone.now()
        redis_client.set(f"analytics:page:{utc_day(now)}:/", '4')
        redis_client.set(f"analytics:page:{utc_day(now - timedelta(days=6))}:/", '3')
        redis_client.set(f"analytics:page:{utc_day(now - timedelta(days=7))}:/", '100')
        redis_client.set(f"analytics:page:{utc_day(now)}:/about", '5')

        top_pages = service.get_summary()['topPages']

        assert top_pages == [{'page': 'Home', 'count': 7}, {'page': 'About', 'count': 5}]

    def test_top_pages_limited_to_five(self, service, redis_client):
        for i in range(8):
            redis_client.set(f"analytics:page:{utc_day()}:/post-{i}", str(i + 1))

        top_pages = service.get_summary()['topPages']

        assert len(top_pages) == 5
        assert top_pages[0] == {'page': '/post-7', 'count': 8}
        assert [p['count'] for p in top_pages] == [8, 7, 6, 5, 4]

    def test_page_paths_with_glob_characters(self, service, redis_client):
        redis_client.set(f"analytics:page:{utc_day()}:/search?q=[x]*", '2')

        assert service.get_summary()['topPages'] == [{'page': '/search?q=[x]*', 'count': 2}]

    def test_recent_activity_skips_bare_page_views(self, service):
        service.record_event(create_event('page_view', '/about'))
        service.record_event(create_event('download', '/', 'Downloaded Resume PDF'))
        service.record_event(create_event('navigation_click', '/portfolio'))
        service.record_event(create_event('contact_click', '/contact'))

        activity = service.get_summary()['recentActivity']

        assert [a['action'] for a in activity] == [
            'Clicked contact',
            'Navigated to page',
            'Downloaded Resume PDF',
        ]
        assert activity[0]['page'] == 'Contact'
        assert activity[2]['page'] == 'Home'

    def test_recent_activity_limited_to_ten(self, service):
        for _ in range(15):
            service.record_event(create_event('download', '/'))

        assert len(service.get_summary()['recentActivity']) == 10

    def test_read_errors_degrade_to_empty_summary(self, service):
        service.record_event(create_event('download', '/'))

        with patch.object(service.store, 'get', side_effect=ConnectionError("kv down")):
            summary = service.get_summary()

        assert summary == {
            'totalPageViews': 0,
            'totalDownloads': 0,
            'totalContactClicks': 0,
            'totalNavigationClicks': 0,
            'topPages': [],
            'recentActivity': [],
        }


class TestTrackEndpoint:

    def test_track_page_view(self, api_client, redis_client):
        response = api_client.post(
            TRACK_URL,
            {'type': 'page_view', 'page': '/about', 'sessionId': 'sess-42'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}

        stored = recent(redis_client)
        assert stored[0]['page'] == '/about'
        assert stored[0]['sessionId'] == 'sess-42'

    def test_session_falls_back_to_cookie(self, api_client, redis_client):
        api_client.cookies[SESSION_COOKIE_NAME] = 'cookie-session'

        api_client.post(TRACK_URL, {'type': 'download', 'page': '/'}, format='json')

        assert recent(redis_client)[0]['sessionId'] == 'cookie-session'

    def test_unknown_type_rejected(self, api_client, redis_client):
        response = api_client.post(TRACK_URL, {'type': 'scroll', 'page': '/'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert recent(redis_client) == []

    def test_admin_pages_are_ignored(self, api_client, redis_client):
        response = api_client.post(TRACK_URL, {'type': 'page_view', 'page': '/admin'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['tracked'] is False
        assert redis_client.keys('analytics:*') == []

    def test_storage_failure_still_succeeds(self, api_client, redis_client):
        with patch('analytics.services.AnalyticsService.push_recent', side_effect=ConnectionError("kv down")):
            response = api_client.post(TRACK_URL, {'type': 'page_view', 'page': '/'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True

    def test_session_cookie_is_issued(self, api_client, redis_client):
        response = api_client.post(TRACK_URL, {'type': 'page_view', 'page': '/'}, format='json')

        cookie = response.cookies[SESSION_COOKIE_NAME]
        assert cookie.value
        assert cookie['samesite'] == 'Lax'
        assert cookie['max-age'] == 86400
        assert recent(redis_client)[0]['sessionId'] == cookie.value

    def test_existing_session_cookie_is_kept(self, api_client, redis_client):
        api_client.cookies[SESSION_COOKIE_NAME] = 'known'

        response = api_client.post(TRACK_URL, {'type': 'page_view', 'page': '/'}, format='json')

        assert SESSION_COOKIE_NAME not in response.cookies


class TestSummaryEndpoint:

    def test_summary_shape(self, api_client, redis_client):
        for event_type in EVENT_TYPES:
            api_client.post(TRACK_URL, {'type': event_type, 'page': '/portfolio', 'action': 'x'}, format='json')

        response = api_client.get(SUMMARY_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        data = response.data['data']
        assert data['totalPageViews'] == 1
        assert data['totalDownloads'] == 1
        assert data['topPages'] == [{'page': 'Portfolio', 'count': 1}]
        assert len(data['recentActivity']) == 4

    def test_summary_is_not_gated(self, api_client, redis_client):
        response = api_client.get(SUMMARY_URL)

        assert response.status_code == status.HTTP_200_OK


class TestResetEndpoint:

    @pytest.fixture
    def populated(self, redis_client):
        service = AnalyticsService()
        service.record_event(create_event('page_view', '/'))
        service.record_event(create_event('download', '/', 'resume'))
        redis_client.set('application:abc', '{}')
        return redis_client

    def test_reset_requires_admin_cookie(self, api_client, populated):
        before = sorted(populated.keys('analytics:*'))

        response = api_client.post(RESET_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data == {'success': False, 'error': 'Unauthorized'}
        assert sorted(populated.keys('analytics:*')) == before
        assert before

    def test_wrong_cookie_value_is_unauthorized(self, api_client, populated):
        api_client.cookies['admin_authenticated'] = 'yes'

        response = api_client.post(RESET_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_reset_removes_analytics_namespace_only(self, admin_client, populated):
        response = admin_client.post(RESET_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert populated.keys('analytics:*') == []
        assert populated.get('application:abc') == '{}'

    def test_reset_storage_failure(self, admin_client, redis_client):
        with patch('core.kv.KeyValueStore.delete_prefix', side_effect=ConnectionError("kv down")):
            response = admin_client.post(RESET_URL)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Failed to reset analytics data'
