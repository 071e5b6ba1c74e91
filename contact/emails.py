"""
Contact Notification Emails

Turns a queued contact payload into the multipart email sent to the site
owner: a plain-text body, an HTML alternative, a generated Message-ID and a
reply-to pointing at the visitor.
"""
import re
from datetime import datetime
from email.utils import make_msgid
from zoneinfo import ZoneInfo

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

GENERAL_INTENT = 'General Inquiry'

# First match wins; keywords match at the start of a word ("job" matches "jobs")
INTENT_KEYWORDS = [
    ('Job Opportunity', ('job', 'career', 'hiring', 'hire', 'position', 'recruit', 'role', 'interview', 'employ')),
    ('Project Inquiry', ('project', 'freelance', 'contract', 'consult', 'quote', 'website', 'build')),
    ('Collaboration', ('collaborat', 'partner', 'together')),
    ('Question', ('question', 'advice', 'help', 'wondering')),
]

SOURCE_LABELS = {
    'modal': 'Website Modal',
    'page': 'Contact Page',
}


def classify_intent(message: str) -> str:
    """Label a message by keyword; only used to make the inbox easier to scan."""
    text = (message or '').lower()
    for label, keywords in INTENT_KEYWORDS:
        pattern = r'\b(?:' + '|'.join(re.escape(k) for k in keywords) + r')'
        if re.search(pattern, text):
            return label
    return GENERAL_INTENT


def _clean_header(value: str) -> str:
    # Header injection guard for subject lines
    return (value or '').replace('\r', ' ').replace('\n', ' ').strip()


def format_timestamp(timestamp: str) -> str:
    """Show an ISO timestamp in the owner's timezone, e.g. 'March 4, 2025 at 09:15 AM'."""
    try:
        moment = datetime.fromisoformat(timestamp)
    except (TypeError, ValueError):
        return timestamp or 'unknown'
    local = moment.astimezone(ZoneInfo(settings.CONTACT_EMAIL_TIMEZONE))
    return f"{local.strftime('%B')} {local.day}, {local.year} at {local.strftime('%I:%M %p')}"


def build_email_context(payload: dict) -> dict:
    return {
        'name': payload.get('name', ''),
        'email': payload.get('email', ''),
        'subject': payload.get('subject', ''),
        'message': payload.get('message', ''),
        'intent': classify_intent(payload.get('message', '')),
        'source_label': SOURCE_LABELS.get(payload.get('source'), 'Contact Page'),
        'submitted_at': format_timestamp(payload.get('timestamp')),
        'ip': payload.get('ip', 'unknown'),
        'user_agent': payload.get('userAgent', 'unknown'),
        'referrer': payload.get('referrer', 'unknown'),
        'url': payload.get('url', ''),
        'site_name': settings.SITE_NAME,
    }


def build_contact_email(payload: dict, connection=None) -> EmailMultiAlternatives:
    """
    Assemble the notification email for one contact payload.

    Raises:
        KeyError: payload lacks the visitor's email address
        TemplateDoesNotExist: email templates are missing
    """
    context = build_email_context(payload)

    text_content = render_to_string('contact/emails/contact_notification.txt', context)
    html_content = render_to_string('contact/emails/contact_notification.html', context)

    subject = _clean_header(f"[{context['intent']}] {context['subject']} - {context['name']}")
    message_id = make_msgid(domain=settings.CONTACT_EMAIL_DOMAIN)

    email = EmailMultiAlternatives(
        subject=subject,
        body=text_content,
        from_email=settings.CONTACT_EMAIL_FROM,
        to=[settings.CONTACT_EMAIL_TO],
        reply_to=[_clean_header(payload['email'])],
        headers={
            'Message-ID': message_id,
            'X-Contact-Message-ID': str(payload.get('id', '')),
        },
        connection=connection,
    )
    email.attach_alternative(html_content, "text/html")
    return email
