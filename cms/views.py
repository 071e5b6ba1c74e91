"""
CMS Views
Crawler-facing documents generated per request host.
"""
from django.conf import settings
from django.http import HttpResponse
from django.template.loader import render_to_string
from django.utils import timezone
from django.views import View


def get_base_url(request):
    """Scheme and host of the current request, e.g. 'https://suwityarat.me'."""
    return f"{request.scheme}://{request.get_host()}"


class RobotsTxtView(View):
    """
    GET /robots.txt
    """

    def get(self, request):
        content = render_to_string('cms/robots.txt', {
            'base_url': get_base_url(request),
            'disallow': settings.ROBOTS_DISALLOW,
            'allow': settings.ROBOTS_ALLOW,
        })
        return HttpResponse(content, content_type='text/plain')


class SitemapXmlView(View):
    """
    GET /sitemap.xml

    Lists SITEMAP_PAGES with today's date as lastmod.
    """

    def get(self, request):
        content = render_to_string('cms/sitemap.xml', {
            'base_url': get_base_url(request),
            'pages': settings.SITEMAP_PAGES,
            'lastmod': timezone.now().date().isoformat(),
        })
        return HttpResponse(content, content_type='application/xml')
