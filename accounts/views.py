"""
Admin Gate Views
"""
import hmac
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .cookies import set_admin_cookie
from .serializers import AdminPinSerializer

logger = logging.getLogger(__name__)


class AdminAuthenticateView(APIView):
    """
    Exchange the shared admin PIN for the admin cookie.

    POST /api/admin/authenticate

    Responses:
    - 200 {success: true} + Set-Cookie on a correct PIN
    - 401 {error: "Invalid PIN"} on a wrong PIN
    - 500 {error: "Admin PIN not configured"} when ADMIN_PIN is unset,
      so the admin page can show a specific hint
    """

    permission_classes = [AllowAny]

    def post(self, request):
        admin_pin = getattr(settings, 'ADMIN_PIN', '')
        if not admin_pin:
            logger.error("ADMIN_PIN is not set")
            return Response(
                {'success': False, 'error': 'Admin PIN not configured'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        try:
            serializer = AdminPinSerializer(data=request.data)
            valid = serializer.is_valid()
        except ParseError as exc:
            logger.error(f"Error authenticating: {exc}")
            return Response(
                {'success': False, 'error': 'Authentication failed'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        pin = serializer.validated_data['pin'] if valid else ''
        if not valid or not hmac.compare_digest(pin.encode(), str(admin_pin).encode()):
            logger.warning("Rejected admin authentication attempt")
            return Response(
                {'success': False, 'error': 'Invalid PIN'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        response = Response({'success': True}, status=status.HTTP_200_OK)
        return set_admin_cookie(response)
