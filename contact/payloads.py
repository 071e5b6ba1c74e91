"""
Contact Queue Payloads

Builds the message published to the contact queue. The payload is plain
JSON so the Celery worker can rebuild the email without any shared state.

Shape:
    {id, name, email, subject, message, timestamp, source,
     ip, userAgent, referrer, url}
"""
import uuid

from django.utils import timezone

UNKNOWN = 'unknown'

# Longest request header value copied into a queued message
HEADER_MAX_LENGTH = 500


def get_client_ip(request):
    """Get client IP address from request."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or UNKNOWN


def _header(request, name):
    return (request.META.get(name) or UNKNOWN)[:HEADER_MAX_LENGTH]


def build_contact_payload(validated_data, request):
    """
    Combine sanitized form fields with what the server observed.

    Args:
        validated_data: Output of ContactFormSubmitSerializer
        request: The incoming request

    Returns:
        dict ready for ``deliver_contact_message.delay``
    """
    return {
        'id': str(uuid.uuid4()),
        'name': validated_data['name'],
        'email': validated_data['email'],
        'subject': validated_data['subject'],
        'message': validated_data['message'],
        'timestamp': timezone.now().isoformat(),
        'source': validated_data['source'],
        'ip': get_client_ip(request),
        'userAgent': _header(request, 'HTTP_USER_AGENT'),
        'referrer': _header(request, 'HTTP_REFERER'),
        'url': request.build_absolute_uri(),
    }
