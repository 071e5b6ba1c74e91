"""
Analytics Service

Reads and writes the analytics namespace of the key-value store.

Key layout:
    analytics:event:<id>             raw event JSON
    analytics:page:<date>:<page>     daily page view counter
    analytics:action:<date>:<action> daily download/click counter
    analytics:recent                 JSON list, newest first, capped

Counters are read-modify-write unless ANALYTICS_ATOMIC_COUNTERS is on, so
concurrent hits on the same key can under-count. Analytics must never break
a page, so writes and summary reads log and swallow storage errors.
"""
import json
import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from core.kv import get_kv_store
from .events import PAGE_VIEW, DOWNLOAD, CONTACT_CLICK, NAVIGATION_CLICK, ACTION_TYPES

logger = logging.getLogger(__name__)

NAMESPACE = 'analytics:'
EVENT_KEY = 'analytics:event:{}'
PAGE_KEY = 'analytics:page:{}:{}'
ACTION_KEY = 'analytics:action:{}:{}'
RECENT_KEY = 'analytics:recent'

PAGE_LABELS = {
    '/': 'Home',
    '/about': 'About',
    '/portfolio': 'Portfolio',
    '/contact': 'Contact',
}


def utc_day(moment=None) -> str:
    """Calendar day used in counter keys, e.g. '2025-06-10'."""
    return (moment or timezone.now()).date().isoformat()


def page_label(page) -> str:
    return PAGE_LABELS.get(page, page)


def empty_summary():
    return {
        'totalPageViews': 0,
        'totalDownloads': 0,
        'totalContactClicks': 0,
        'totalNavigationClicks': 0,
        'topPages': [],
        'recentActivity': [],
    }


def describe_activity(event) -> str:
    """Human-readable label for one recent event."""
    if event.get('action'):
        return event['action']

    event_type = event.get('type')
    if event_type == PAGE_VIEW:
        return f"Viewed {page_label(event.get('page'))}"
    if event_type == DOWNLOAD:
        return 'Downloaded Resume'
    if event_type == CONTACT_CLICK:
        return 'Clicked contact'
    if event_type == NAVIGATION_CLICK:
        return 'Navigated to page'
    return 'Unknown'


class AnalyticsService:
    """
    Service for storing analytics events and building the admin summary.

    Usage:
        service = AnalyticsService()
        service.record_event(create_event('page_view', '/about'))
        summary = service.get_summary()
    """

    def __init__(self, store=None):
        self.store = store or get_kv_store()
        self.recent_limit = settings.ANALYTICS_RECENT_LIMIT
        self.atomic_counters = settings.ANALYTICS_ATOMIC_COUNTERS

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def record_event(self, event) -> bool:
        """
        Store one event and fold it into the counters and recent list.

        Returns:
            True when every write succeeded, False when a storage error was
            logged and swallowed.
        """
        try:
            self.store.put(EVENT_KEY.format(event['id']), json.dumps(event))

            today = utc_day()

            if event['type'] == PAGE_VIEW:
                self.increment(PAGE_KEY.format(today, event['page']))

            if event['type'] in ACTION_TYPES:
                self.increment(ACTION_KEY.format(today, event.get('action') or event['type']))

            self.push_recent(event)
            return True

        except Exception as exc:
            logger.error(f"Error storing analytics event {event.get('id')}: {exc}")
            return False

    def increment(self, key) -> int:
        if self.atomic_counters:
            return self.store.incr(key)

        current = self.store.get(key)
        count = int(current) + 1 if current else 1
        self.store.put(key, str(count))
        return count

    def push_recent(self, event):
        """Prepend to the recent list and evict anything past the cap."""
        events = self.get_recent_events()
        events.insert(0, event)
        del events[self.recent_limit:]
        self.store.put(RECENT_KEY, json.dumps(events))

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_recent_events(self):
        raw = self.store.get(RECENT_KEY)
        return json.loads(raw) if raw else []

    def get_count(self, key) -> int:
        value = self.store.get(key)
        return int(value) if value else 0

    def get_page_counts(self, days=None):
        """Sum daily page view counters over the last ``days`` UTC days (today included)."""
        days = days or settings.ANALYTICS_SUMMARY_DAYS
        now = timezone.now()
        page_counts = {}

        for offset in range(days):
            prefix = PAGE_KEY.format(utc_day(now - timedelta(days=offset)), '')
            for key in self.store.list_keys(prefix):
                page = key[len(prefix):]
                page_counts[page] = page_counts.get(page, 0) + self.get_count(key)

        return page_counts

    def get_summary(self):
        """
        Build the admin dashboard summary.

        Totals are counted over the recent list; top pages come from the
        daily counters. Any read error degrades to an empty summary.
        """
        try:
            recent_events = self.get_recent_events()

            def count_type(event_type):
                return sum(1 for e in recent_events if e.get('type') == event_type)

            # Pages sharing a display label are merged
            labelled = {}
            for page, count in self.get_page_counts().items():
                label = page_label(page)
                labelled[label] = labelled.get(label, 0) + count

            top_pages = sorted(
                ({'page': label, 'count': count} for label, count in labelled.items()),
                key=lambda item: item['count'],
                reverse=True
            )[:settings.ANALYTICS_TOP_PAGES]

            # Bare page views are noise in the activity feed
            recent_activity = [
                {
                    'action': describe_activity(event),
                    'page': page_label(event.get('page')),
                    'timestamp': event.get('timestamp'),
                }
                for event in recent_events
                if event.get('type') != PAGE_VIEW or event.get('action')
            ][:settings.ANALYTICS_RECENT_ACTIVITY]

            return {
                'totalPageViews': count_type(PAGE_VIEW),
                'totalDownloads': count_type(DOWNLOAD),
                'totalContactClicks': count_type(CONTACT_CLICK),
                'totalNavigationClicks': count_type(NAVIGATION_CLICK),
                'topPages': top_pages,
                'recentActivity': recent_activity,
            }

        except Exception as exc:
            logger.error(f"Error getting analytics summary: {exc}")
            return empty_summary()

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self) -> int:
        """Delete every key under the analytics namespace. Errors propagate."""
        deleted = self.store.delete_prefix(NAMESPACE)
        logger.info(f"Analytics data reset successfully ({deleted} keys)")
        return deleted
