"""
Admin Gate Permissions
"""
from rest_framework import permissions, status
from rest_framework.exceptions import APIException

from .cookies import has_admin_cookie


class AdminAuthenticationRequired(APIException):
    """Raised when an admin-only endpoint is called without the admin cookie."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'
    default_code = 'not_authenticated'


class HasAdminCookie(permissions.BasePermission):
    """
    Permission for endpoints reserved to the admin page.

    Answers 401 rather than DRF's default 403 since the fix is to
    authenticate with the PIN.
    """

    def has_permission(self, request, view):
        if not has_admin_cookie(request):
            raise AdminAuthenticationRequired()
        return True
