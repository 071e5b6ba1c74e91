"""
Saved Applications URL Configuration
"""
from django.urls import path
from .views import ApplicationListCreateView, ApplicationDetailView

app_name = 'applications'

urlpatterns = [
    path('applications', ApplicationListCreateView.as_view(), name='list'),
    path('applications/<str:id>', ApplicationDetailView.as_view(), name='detail'),
]
