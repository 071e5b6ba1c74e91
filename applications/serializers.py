"""
Saved Application Serializers
"""
from rest_framework import serializers


class JobDetailsSerializer(serializers.Serializer):
    """Job fields entered in the cover-letter tool; extra keys are kept."""

    company = serializers.CharField(required=False, allow_blank=True, default='')
    position = serializers.CharField(required=False, allow_blank=True, default='')

    def to_internal_value(self, data):
        validated = super().to_internal_value(data)
        return {**data, **validated}


class ApplicationCreateSerializer(serializers.Serializer):
    applicationName = serializers.CharField(max_length=200)
    jobDetails = JobDetailsSerializer()
    generatedContent = serializers.DictField()


class ApplicationUpdateSerializer(serializers.Serializer):
    applicationName = serializers.CharField(max_length=200, required=False)
    jobDetails = JobDetailsSerializer(required=False)
    generatedContent = serializers.DictField(required=False)
