"""
Tests for robots.txt and sitemap.xml.
"""
from xml.etree import ElementTree

from django.utils import timezone

SITEMAP_NS = {'sm': 'http://www.sitemaps.org/schemas/sitemap/0.9'}


class TestRobotsTxt:

    def test_robots(self, client):
        response = client.get('/robots.txt', HTTP_HOST='suwityarat.me', secure=True)

        assert response.status_code == 200
        assert response['Content-Type'].startswith('text/plain')

        body = response.content.decode()
        assert body.startswith('User-agent: *\nAllow: /\n')
        assert 'Sitemap: https://suwityarat.me/sitemap.xml' in body
        assert 'Disallow: /admin/' in body
        assert 'Disallow: /resume-pdf/' in body
        assert 'Allow: /portfolio' in body

    def test_robots_follows_request_host(self, client):
        response = client.get('/robots.txt', HTTP_HOST='localhost')

        assert 'Sitemap: http://localhost/sitemap.xml' in response.content.decode()


class TestSitemapXml:

    def test_sitemap(self, client):
        response = client.get('/sitemap.xml', HTTP_HOST='suwityarat.me', secure=True)

        assert response.status_code == 200
        assert response['Content-Type'].startswith('application/xml')

        root = ElementTree.fromstring(response.content)
        locs = [loc.text for loc in root.findall('sm:url/sm:loc', SITEMAP_NS)]
        assert locs == [
            'https://suwityarat.me',
            'https://suwityarat.me/about',
            'https://suwityarat.me/portfolio',
            'https://suwityarat.me/contact',
            'https://suwityarat.me/resume-pdf',
        ]

    def test_lastmod_is_today(self, client):
        response = client.get('/sitemap.xml')

        root = ElementTree.fromstring(response.content)
        lastmods = {node.text for node in root.findall('sm:url/sm:lastmod', SITEMAP_NS)}
        assert lastmods == {timezone.now().date().isoformat()}

    def test_priorities(self, client):
        response = client.get('/sitemap.xml')

        root = ElementTree.fromstring(response.content)
        priorities = [node.text for node in root.findall('sm:url/sm:priority', SITEMAP_NS)]
        assert priorities == ['1.0', '0.9', '0.9', '0.8', '0.6']
