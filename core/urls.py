"""
URL configuration for the portfolio backend.

API endpoints live under /api/; robots.txt and sitemap.xml are served from
the site root.
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('contact.urls')),  # Public contact form
    path('api/admin/', include('accounts.urls')),  # Admin PIN gate
    path('api/analytics/', include('analytics.urls')),  # Visit analytics
    path('api/', include('applications.urls')),  # Saved cover-letter applications
    path('', include('cms.urls')),  # robots.txt, sitemap.xml
]
