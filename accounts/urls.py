"""
Admin Gate URL Configuration
"""
from django.urls import path
from .views import AdminAuthenticateView

app_name = 'accounts'

urlpatterns = [
    path('authenticate', AdminAuthenticateView.as_view(), name='authenticate'),
]
