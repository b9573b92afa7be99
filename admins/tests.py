from datetime import datetime, timedelta, timezone as dt_timezone

import jwt
from django.test import TestCase
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from core.testing import authenticate, make_admin

from .models import Admin
from .tokens import TokenExpired, TokenInvalid, issue_token, verify_token


def expired_token(admin):
    token = AccessToken.for_user(admin)
    token.set_exp(from_time=datetime.now(tz=dt_timezone.utc) - timedelta(days=8))
    return str(token)


class TokenServiceTest(TestCase):
    """Issue and verify bearer tokens"""

    def setUp(self):
        self.admin = make_admin()

    def test_issued_token_verifies(self):
        payload = verify_token(issue_token(self.admin))
        self.assertEqual(payload['adminId'], self.admin.pk)
        remaining = payload['expiry'] - datetime.now(tz=dt_timezone.utc)
        self.assertGreater(remaining, timedelta(days=6, hours=23))
        self.assertLessEqual(remaining, timedelta(days=7))

    def test_expired_token(self):
        with self.assertRaises(TokenExpired):
            verify_token(expired_token(self.admin))

    def test_tampered_token(self):
        header, payload, signature = issue_token(self.admin).split('.')
        forged = jwt.encode(
            {'adminId': 999, 'token_type': 'access', 'exp': 4102444800, 'jti': 'x'},
            'some-other-secret',
            algorithm='HS256',
        )
        with self.assertRaises(TokenInvalid):
            verify_token(forged)
        with self.assertRaises(TokenInvalid):
            verify_token(f'{header}.{forged.split(".")[1]}.{signature}')

    def test_garbage_token(self):
        with self.assertRaises(TokenInvalid):
            verify_token('not-a-token')

    def test_string_admin_id_claim_is_normalised(self):
        token = AccessToken.for_user(self.admin)
        token['adminId'] = str(self.admin.pk)
        self.assertEqual(verify_token(str(token))['adminId'], self.admin.pk)

    def test_non_numeric_admin_id_claim(self):
        token = AccessToken.for_user(self.admin)
        token['adminId'] = 'abc'
        with self.assertRaises(TokenInvalid):
            verify_token(str(token))


class AccessMiddlewareTest(APITestCase):
    """Bearer token resolution on a protected route"""
    url = '/api/admin/profile'

    def setUp(self):
        self.admin = make_admin()

    def test_missing_token(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data, {'success': False, 'message': 'Access token is required'})

    def test_invalid_token(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer abc.def.ghi')
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Invalid token')

    def test_expired_token(self):
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {expired_token(self.admin)}')
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Token expired')

    def test_deactivated_admin(self):
        authenticate(self.client, self.admin)
        Admin.objects.filter(pk=self.admin.pk).update(is_active=False)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Invalid or inactive admin account')

    def test_valid_token(self):
        authenticate(self.client, self.admin)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['data']['admin']['email'], 'admin@example.com')
        self.assertNotIn('password', response.data['data']['admin'])


class SignupLoginTest(APITestCase):

    def test_signup(self):
        response = self.client.post('/api/admin/signup', {
            'fullName': 'Jane Doe',
            'email': 'Jane@Example.com',
            'password': 'secret123',
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['message'], 'Admin created successfully')
        admin = response.data['data']['admin']
        self.assertEqual(admin['email'], 'jane@example.com')
        self.assertEqual(admin['role'], 'admin')
        self.assertTrue(admin['isActive'])
        payload = verify_token(response.data['data']['token'])
        self.assertEqual(payload['adminId'], admin['id'])

    def test_signup_duplicate_email(self):
        make_admin(email='jane@example.com')
        response = self.client.post('/api/admin/signup', {
            'fullName': 'Jane Doe',
            'email': 'JANE@example.com',
            'password': 'secret123',
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Admin with this email already exists')
        self.assertEqual(Admin.objects.count(), 1)

    def test_signup_validation_messages(self):
        response = self.client.post('/api/admin/signup', {
            'fullName': 'J',
            'email': 'jane@example.com',
            'password': 'secret123',
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Full name must be at least 2 characters long')

        response = self.client.post('/api/admin/signup', {
            'fullName': 'Jane',
            'email': 'not-an-email',
            'password': 'secret123',
        })
        self.assertEqual(response.data['message'], 'Please enter a valid email address')

        response = self.client.post('/api/admin/signup', {
            'fullName': 'Jane',
            'email': 'jane@example.com',
            'password': '123',
        })
        self.assertEqual(response.data['message'], 'Password must be at least 6 characters long')

    def test_login(self):
        admin = make_admin(email='jane@example.com', password='secret123')
        response = self.client.post('/api/admin/login', {'email': 'jane@example.com', 'password': 'secret123'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Login successful')
        admin.refresh_from_db()
        self.assertIsNotNone(admin.last_login)
        self.assertEqual(verify_token(response.data['data']['token'])['adminId'], admin.pk)

    def test_login_wrong_password_and_unknown_email(self):
        make_admin(email='jane@example.com', password='secret123')
        for payload in (
            {'email': 'jane@example.com', 'password': 'wrong-password'},
            {'email': 'nobody@example.com', 'password': 'secret123'},
        ):
            response = self.client.post('/api/admin/login', payload)
            self.assertEqual(response.status_code, 401)
            self.assertEqual(response.data['message'], 'Invalid email or password')

    def test_login_deactivated(self):
        make_admin(email='jane@example.com', password='secret123', is_active=False)
        response = self.client.post('/api/admin/login', {'email': 'jane@example.com', 'password': 'secret123'})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Account is deactivated')


class ProfileTest(APITestCase):

    def setUp(self):
        self.admin = make_admin(email='jane@example.com', password='secret123')
        authenticate(self.client, self.admin)

    def test_update_profile(self):
        response = self.client.put('/api/admin/profile', {'fullName': 'Jane Smith'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Profile updated successfully')
        self.assertEqual(response.data['data']['admin']['fullName'], 'Jane Smith')
        self.assertEqual(response.data['data']['admin']['email'], 'jane@example.com')

    def test_update_profile_email_taken(self):
        make_admin(email='other@example.com')
        response = self.client.put('/api/admin/profile', {'email': 'other@example.com'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Email is already taken')

    def test_change_password(self):
        response = self.client.put('/api/admin/change-password', {
            'currentPassword': 'secret123',
            'newPassword': 'newsecret',
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Password changed successfully')
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.check_password('newsecret'))

    def test_change_password_wrong_current(self):
        response = self.client.put('/api/admin/change-password', {
            'currentPassword': 'nope-nope',
            'newPassword': 'newsecret',
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Current password is incorrect')

    def test_logout(self):
        response = self.client.post('/api/admin/logout')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {'success': True, 'message': 'Logout successful'})
