"""
CMS Public URLs

Crawler-facing documents served from the site root.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('robots.txt', views.RobotsTxtView.as_view(), name='robots-txt'),
    path('sitemap.xml', views.SitemapXmlView.as_view(), name='sitemap-xml'),
]
