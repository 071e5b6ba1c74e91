"""
Admin Gate Serializers
"""
from rest_framework import serializers


class AdminPinSerializer(serializers.Serializer):
    """PIN submitted from the admin page."""

    pin = serializers.CharField(
        required=True,
        allow_blank=True,
        trim_whitespace=False,
        help_text="Shared admin PIN"
    )
