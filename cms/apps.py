"""
CMS App Configuration
Crawler-facing site documents (robots.txt, sitemap.xml).
"""
from django.apps import AppConfig


class CmsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cms'
    verbose_name = 'Site Metadata'
