"""
Contact Views

Public endpoint for contact form submissions.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .payloads import build_contact_payload
from .serializers import ContactFormSubmitSerializer, describe_errors
from .tasks import deliver_contact_message

logger = logging.getLogger(__name__)

PROCESSING_ERROR = "Failed to process contact form"


class ContactFormSubmitView(APIView):
    """
    Public endpoint for contact form submissions.

    POST /api/contact

    Validates the form, queues one message for the email worker and
    acknowledges the visitor. Delivery retries happen in the worker.
    """

    permission_classes = [AllowAny]

    def post(self, request):
        """Submit a contact form."""
        try:
            data = request.data
        except ParseError as exc:
            logger.error(f"Malformed contact form body: {exc}")
            return Response(
                {'success': False, 'error': PROCESSING_ERROR},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        serializer = ContactFormSubmitSerializer(data=data)

        if not serializer.is_valid():
            return Response(
                {
                    'success': False,
                    'error': describe_errors(serializer.errors),
                    'fields': serializer.errors
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        payload = build_contact_payload(serializer.validated_data, request)

        try:
            deliver_contact_message.delay(payload)
        except Exception as exc:
            logger.error(f"Failed to queue contact message {payload['id']}: {exc}")
            return Response(
                {'success': False, 'error': PROCESSING_ERROR},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        logger.info(f"Queued contact message {payload['id']} from {payload['email']} ({payload['source']})")

        return Response(
            {
                'success': True,
                'message': "Thank you for your message! I'll get back to you soon."
            },
            status=status.HTTP_200_OK
        )
