"""
Contact Serializers

Validates and sanitizes contact form submissions.
"""
import re

from rest_framework import serializers

# Field caps bound the size of queued messages and outgoing email
NAME_MAX_LENGTH = 100
SUBJECT_MAX_LENGTH = 200
MESSAGE_MAX_LENGTH = 2000

DEFAULT_SUBJECT = 'Contact Form Submission'

SOURCE_CHOICES = [
    ('modal', 'Website Modal'),
    ('page', 'Contact Page'),
]

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

REQUIRED_FIELDS = ('name', 'email', 'message')
MISSING_CODES = ('required', 'blank', 'null')


class ContactFormSubmitSerializer(serializers.Serializer):
    """
    Public contact form submission serializer.

    Over-long text is truncated rather than rejected.
    """

    name = serializers.CharField(required=True)

    email = serializers.CharField(required=True)

    subject = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
    )

    message = serializers.CharField(required=True)

    source = serializers.ChoiceField(
        choices=SOURCE_CHOICES,
        required=False,
        default='modal',
    )

    def validate_name(self, value):
        return value.strip()[:NAME_MAX_LENGTH]

    def validate_email(self, value):
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise serializers.ValidationError("Invalid email format", code='invalid')
        return value

    def validate_subject(self, value):
        if not value or not value.strip():
            return DEFAULT_SUBJECT
        return value.strip()[:SUBJECT_MAX_LENGTH]

    def validate_message(self, value):
        return value.strip()[:MESSAGE_MAX_LENGTH]

    def validate(self, attrs):
        # An omitted subject never reaches validate_subject
        if not attrs.get('subject'):
            attrs['subject'] = DEFAULT_SUBJECT
        return attrs


def describe_errors(errors) -> str:
    """Pick the human-readable message shown to the visitor."""
    for field in REQUIRED_FIELDS:
        if any(getattr(error, 'code', None) in MISSING_CODES for error in errors.get(field, [])):
            return "Name, email, and message are required"
    if 'email' in errors:
        return "Invalid email format"
    return "Invalid submission"
