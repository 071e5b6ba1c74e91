"""
Analytics Serializers
"""
from rest_framework import serializers

from .events import EVENT_TYPES


class TrackEventSerializer(serializers.Serializer):
    """
    Event posted by the site's tracker.

    Body: {type, page, action?, sessionId?}
    """

    type = serializers.ChoiceField(choices=EVENT_TYPES)

    page = serializers.CharField(max_length=500)

    action = serializers.CharField(
        max_length=200,
        required=False,
        allow_blank=True,
        allow_null=True,
    )

    sessionId = serializers.CharField(
        max_length=100,
        required=False,
        allow_blank=True,
        allow_null=True,
    )


class TopPageSerializer(serializers.Serializer):
    page = serializers.CharField()
    count = serializers.IntegerField()


class RecentActivitySerializer(serializers.Serializer):
    action = serializers.CharField()
    page = serializers.CharField(allow_null=True)
    timestamp = serializers.IntegerField(allow_null=True)


class AnalyticsSummarySerializer(serializers.Serializer):
    """Summary shown on the admin page."""

    totalPageViews = serializers.IntegerField()
    totalDownloads = serializers.IntegerField()
    totalContactClicks = serializers.IntegerField()
    totalNavigationClicks = serializers.IntegerField()
    topPages = TopPageSerializer(many=True)
    recentActivity = RecentActivitySerializer(many=True)
