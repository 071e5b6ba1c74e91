"""
Analytics Session Middleware

Attaches ``request.analytics_session_id`` for the duration of the request
and issues the ``session_id`` cookie to browsers that do not have one yet.
"""
from .session import SESSION_COOKIE_NAME, resolve_session_id, set_session_cookie


class AnalyticsSessionMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.analytics_session_id = resolve_session_id(request)

        response = self.get_response(request)

        if SESSION_COOKIE_NAME not in request.COOKIES:
            set_session_cookie(response, request.analytics_session_id)
        return response
