# jobboard/tests.py
from django.test import TestCase, override_settings
from django.urls import reverse


class ProjectTest(TestCase):
    def test_index(self):
        resp = self.client.get(reverse('index'))
        self.assertEqual(resp.status_code, 200)
        self.assertIn(b'running', resp.content)

    @override_settings(CORS_ALLOWED_ORIGINS=['http://localhost:5173'])
    def test_cors_allows_configured_origin_with_credentials(self):
        resp = self.client.get(reverse('jobs:job_collection'), HTTP_ORIGIN='http://localhost:5173')
        self.assertEqual(resp['Access-Control-Allow-Origin'], 'http://localhost:5173')
        self.assertEqual(resp['Access-Control-Allow-Credentials'], 'true')

    @override_settings(CORS_ALLOWED_ORIGINS=['http://localhost:5173'])
    def test_cors_ignores_unknown_origin(self):
        resp = self.client.get(reverse('jobs:job_collection'), HTTP_ORIGIN='https://evil.example')
        self.assertFalse(resp.has_header('Access-Control-Allow-Origin'))
