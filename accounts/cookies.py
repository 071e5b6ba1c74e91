"""
Admin Cookie Helpers

The admin gate is a single shared PIN. A correct PIN earns a cookie that
the admin-only endpoints check; there are no user accounts.
"""
from django.conf import settings

ADMIN_COOKIE_NAME = 'admin_authenticated'
ADMIN_COOKIE_VALUE = 'true'
ADMIN_COOKIE_MAX_AGE = 86400  # 24 hours


def set_admin_cookie(response):
    """Attach the admin cookie (HttpOnly, Secure, SameSite=Strict)."""
    response.set_cookie(
        ADMIN_COOKIE_NAME,
        ADMIN_COOKIE_VALUE,
        max_age=ADMIN_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.ADMIN_COOKIE_SECURE,
        samesite='Strict',
    )
    return response


def has_admin_cookie(request) -> bool:
    return request.COOKIES.get(ADMIN_COOKIE_NAME) == ADMIN_COOKIE_VALUE
