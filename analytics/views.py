"""
Analytics Views

Endpoints:
- POST /api/analytics/track    public, fire-and-forget event tracking
- GET  /api/analytics/summary  summary for the admin page
- POST /api/analytics/reset    admin cookie required
"""
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import HasAdminCookie
from .events import create_event
from .serializers import TrackEventSerializer, AnalyticsSummarySerializer
from .services import AnalyticsService
from .session import is_trackable_page

logger = logging.getLogger(__name__)


class TrackEventView(APIView):
    """
    Record one analytics event.

    POST /api/analytics/track

    Storage failures are logged by the service and never reach the
    visitor; only a malformed event is rejected.
    """

    permission_classes = [AllowAny]

    def post(self, request):
        serializer = TrackEventSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'success': False, 'error': 'Invalid analytics event', 'fields': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        data = serializer.validated_data

        if not is_trackable_page(data['page']):
            return Response({'success': True, 'tracked': False})

        session_id = data.get('sessionId') or getattr(request, 'analytics_session_id', None)
        event = create_event(data['type'], data['page'], data.get('action'), session_id)

        AnalyticsService().record_event(event)

        return Response({'success': True})


class AnalyticsSummaryView(APIView):
    """
    GET /api/analytics/summary

    Not gated by the admin cookie; only the admin page calls it.
    """

    permission_classes = [AllowAny]

    def get(self, request):
        summary = AnalyticsService().get_summary()
        return Response({'success': True, 'data': AnalyticsSummarySerializer(summary).data})


class AnalyticsResetView(APIView):
    """
    POST /api/analytics/reset

    Deletes every analytics key. Without the admin cookie the request is
    refused with 401 before anything is touched.
    """

    permission_classes = [HasAdminCookie]

    def post(self, request):
        try:
            AnalyticsService().reset()
        except Exception as exc:
            logger.error(f"Error resetting analytics: {exc}")
            return Response(
                {'success': False, 'error': 'Failed to reset analytics data'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({'success': True, 'message': 'Analytics data reset successfully'})
