"""
Analytics URL Configuration
"""
from django.urls import path
from .views import TrackEventView, AnalyticsSummaryView, AnalyticsResetView

app_name = 'analytics'

urlpatterns = [
    path('track', TrackEventView.as_view(), name='track'),
    path('summary', AnalyticsSummaryView.as_view(), name='summary'),
    path('reset', AnalyticsResetView.as_view(), name='reset'),
]
