# accounts/tests.py
import json
import time
from unittest import mock

from django.http import HttpResponse
from django.test import TestCase, RequestFactory, override_settings
from django.urls import reverse

from .decorators import token_required, identity_mismatch
from .tokens import InvalidToken, issue_token, verify_token


def _whoami(request):
    return HttpResponse(request.auth_email)


class TokenTest(TestCase):
    def test_payload_survives_signing(self):
        token = issue_token({'email': 'a@example.com', 'name': 'A'})
        self.assertEqual(verify_token(token), {'email': 'a@example.com', 'name': 'A'})

    def test_tampered_token_rejected(self):
        token = issue_token({'email': 'a@example.com'})
        with self.assertRaises(InvalidToken):
            verify_token(token[:-2] + ('xy' if not token.endswith('xy') else 'zz'))

    def test_garbage_rejected(self):
        with self.assertRaises(InvalidToken):
            verify_token('not-a-token')

    def test_token_expires_after_seven_days(self):
        eight_days_ago = time.time() - 8 * 24 * 60 * 60
        with mock.patch('django.core.signing.time.time', return_value=eight_days_ago):
            token = issue_token({'email': 'a@example.com'})
        with self.assertRaises(InvalidToken):
            verify_token(token)

    def test_token_still_valid_after_six_days(self):
        six_days_ago = time.time() - 6 * 24 * 60 * 60
        with mock.patch('django.core.signing.time.time', return_value=six_days_ago):
            token = issue_token({'email': 'a@example.com'})
        self.assertEqual(verify_token(token)['email'], 'a@example.com')

    @override_settings(AUTH_TOKEN_SECRET='another-secret')
    def test_token_from_other_secret_rejected(self):
        with override_settings(AUTH_TOKEN_SECRET='first-secret'):
            token = issue_token({'email': 'a@example.com'})
        with self.assertRaises(InvalidToken):
            verify_token(token)


class TokenRequiredTest(TestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.view = token_required(_whoami)

    def test_missing_cookie_is_unauthenticated(self):
        resp = self.view(self.factory.get('/'))
        self.assertEqual(resp.status_code, 401)

    def test_invalid_cookie_is_unauthenticated(self):
        request = self.factory.get('/')
        request.COOKIES['token'] = 'forged'
        resp = self.view(request)
        self.assertEqual(resp.status_code, 401)

    def test_token_without_email_claim_is_unauthenticated(self):
        request = self.factory.get('/')
        request.COOKIES['token'] = issue_token({'name': 'nobody'})
        resp = self.view(request)
        self.assertEqual(resp.status_code, 401)

    def test_valid_cookie_attaches_identity(self):
        request = self.factory.get('/')
        request.COOKIES['token'] = issue_token({'email': 'a@example.com'})
        resp = self.view(request)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.content, b'a@example.com')

    def test_identity_mismatch(self):
        request = self.factory.get('/')
        request.auth_email = 'a@example.com'
        self.assertIsNone(identity_mismatch(request, 'a@example.com'))
        self.assertEqual(identity_mismatch(request, 'b@example.com').status_code, 403)


class CookieViewsTest(TestCase):
    def test_jwt_sets_http_only_cookie(self):
        resp = self.client.post(reverse('accounts:issue_jwt'), data=json.dumps({'email': 'a@example.com'}),
                                content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {'success': True})
        cookie = resp.cookies['token']
        self.assertTrue(cookie['httponly'])
        self.assertEqual(int(cookie['max-age']), 7 * 24 * 60 * 60)
        self.assertEqual(cookie['samesite'], 'Lax')
        self.assertFalse(cookie['secure'])
        self.assertEqual(verify_token(cookie.value)['email'], 'a@example.com')

    @override_settings(AUTH_COOKIE_SECURE=True, AUTH_COOKIE_SAMESITE='None')
    def test_production_cookie_is_secure_and_cross_site(self):
        resp = self.client.post(reverse('accounts:issue_jwt'), data=json.dumps({'email': 'a@example.com'}),
                                content_type='application/json')
        cookie = resp.cookies['token']
        self.assertTrue(cookie['secure'])
        self.assertEqual(cookie['samesite'], 'None')

    def test_jwt_rejects_non_object_payload(self):
        resp = self.client.post(reverse('accounts:issue_jwt'), data='[1, 2]', content_type='application/json')
        self.assertEqual(resp.status_code, 400)

    def test_jwt_rejects_invalid_json(self):
        resp = self.client.post(reverse('accounts:issue_jwt'), data='{nope', content_type='application/json')
        self.assertEqual(resp.status_code, 400)

    def test_logout_without_session_succeeds(self):
        resp = self.client.post(reverse('accounts:logout'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {'success': True})
        self.assertEqual(int(resp.cookies['token']['max-age']), 0)

    def test_logout_clears_issued_cookie(self):
        self.client.post(reverse('accounts:issue_jwt'), data=json.dumps({'email': 'a@example.com'}),
                         content_type='application/json')
        resp = self.client.post(reverse('accounts:logout'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.cookies['token'].value, '')

    def test_jwt_requires_post(self):
        resp = self.client.get(reverse('accounts:issue_jwt'))
        self.assertEqual(resp.status_code, 405)
