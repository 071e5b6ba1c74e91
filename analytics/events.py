"""
Analytics Events

An event is a plain dict so it can be stored as JSON as-is:

    {
        "id": "6f1c...",             # uuid4
        "type": "download",          # one of EVENT_TYPES
        "page": "/portfolio",
        "action": "resume_download", # optional
        "timestamp": 1718035200000,  # epoch milliseconds
        "sessionId": "b2d4..."       # optional
    }
"""
import time
import uuid

PAGE_VIEW = 'page_view'
DOWNLOAD = 'download'
CONTACT_CLICK = 'contact_click'
NAVIGATION_CLICK = 'navigation_click'

EVENT_TYPES = [PAGE_VIEW, DOWNLOAD, CONTACT_CLICK, NAVIGATION_CLICK]

# Types folded into the daily action counter
ACTION_TYPES = [DOWNLOAD, CONTACT_CLICK, NAVIGATION_CLICK]


def now_ms() -> int:
    return int(time.time() * 1000)


def create_event(event_type, page, action=None, session_id=None):
    """Build a new event with a fresh id and timestamp."""
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown analytics event type: {event_type}")

    return {
        'id': str(uuid.uuid4()),
        'type': event_type,
        'page': page,
        'action': action or None,
        'timestamp': now_ms(),
        'sessionId': session_id or None,
    }
