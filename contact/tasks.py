"""
Contact Queue Consumer

Celery task that turns each queued contact payload into an email to the
site owner.

Per message:
    Received -> Formatting -> Sent (acked)
    Received -> Formatting -> Failed -> Retried

Any exception while formatting or sending is retried with a doubling
countdown. Once max_retries is exhausted Celery records the failure; there
is no dead-letter queue.
"""
import logging

from celery import shared_task
from django.conf import settings

from core.kv import get_kv_store
from .emails import build_contact_email

logger = logging.getLogger(__name__)

DELIVERED_KEY = 'contact:delivered:{}'


def _already_delivered(message_id):
    """Best-effort redelivery check; a store outage never blocks sending."""
    if not message_id:
        return False
    try:
        return get_kv_store().exists(DELIVERED_KEY.format(message_id))
    except Exception as exc:
        logger.warning(f"Could not check delivery marker for {message_id}: {exc}")
        return False


def _mark_delivered(message_id):
    if not message_id:
        return
    try:
        get_kv_store().put(
            DELIVERED_KEY.format(message_id),
            '1',
            ttl=settings.CONTACT_DELIVERED_MARKER_TTL
        )
    except Exception as exc:
        logger.warning(f"Could not store delivery marker for {message_id}: {exc}")


@shared_task(bind=True, acks_late=True, max_retries=settings.CONTACT_EMAIL_MAX_RETRIES)
def deliver_contact_message(self, payload):
    """
    Send the notification email for one contact form submission.

    Args:
        payload: dict built by contact.payloads.build_contact_payload
    """
    message_id = payload.get('id')

    if _already_delivered(message_id):
        logger.info(f"Contact message {message_id} already delivered, acknowledging redelivery")
        return {'status': 'duplicate', 'id': message_id}

    try:
        email = build_contact_email(payload)
        email.send(fail_silently=False)
    except Exception as exc:
        retries = self.request.retries
        logger.error(
            f"Failed to send email for contact message {message_id} "
            f"(attempt {retries + 1}): {exc}"
        )
        raise self.retry(
            exc=exc,
            countdown=settings.CONTACT_EMAIL_RETRY_DELAY * (2 ** retries)
        )

    _mark_delivered(message_id)

    logger.info(
        f"Email sent successfully for contact from {payload.get('name')} ({payload.get('email')})"
    )
    return {
        'status': 'sent',
        'id': message_id,
        'message_id': email.extra_headers.get('Message-ID'),
    }
