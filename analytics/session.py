"""
Analytics session identifiers.

The session id only groups events from one browser; it is never used for
authentication.
"""
import uuid

from django.conf import settings

SESSION_COOKIE_NAME = 'session_id'
SESSION_COOKIE_MAX_AGE = 86400  # 1 day

ADMIN_PATH = '/admin'


def generate_session_id() -> str:
    return str(uuid.uuid4())


def resolve_session_id(request):
    """Return the session id from the cookie, or a new one."""
    return request.COOKIES.get(SESSION_COOKIE_NAME) or generate_session_id()


def set_session_cookie(response, session_id):
    # Readable by client script so the tracker can echo it back
    response.set_cookie(
        SESSION_COOKIE_NAME,
        session_id,
        max_age=SESSION_COOKIE_MAX_AGE,
        httponly=False,
        secure=settings.SESSION_ID_COOKIE_SECURE,
        samesite='Lax',
    )
    return response


def is_trackable_page(path) -> bool:
    """Admin pages are never tracked."""
    path = path or ''
    return not (path == ADMIN_PATH or path.startswith(ADMIN_PATH + '/'))
