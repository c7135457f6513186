from django.test import TestCase
from rest_framework.test import APITestCase
from rest_framework import status

from .models import User


class UserModelTest(TestCase):
    """Test User model"""

    def test_create_user_uses_email_as_username(self):
        user = User.objects.create_user(email='Ada@Example.com', password='testpass123')
        self.assertEqual(user.email, 'Ada@example.com')
        self.assertEqual(user.username, 'Ada@example.com')
        self.assertTrue(user.check_password('testpass123'))

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='testpass123')

    def test_create_superuser(self):
        user = User.objects.create_superuser(email='admin@example.com', password='testpass123')
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)


class RegistrationAPITest(APITestCase):
    """Test registration and token endpoints"""

    def register(self, **overrides):
        data = {
            'email': 'ada@example.com',
            'password': 'SecurePass123',
            'password_confirm': 'SecurePass123',
            'first_name': 'Ada',
            'last_name': 'Obi'
        }
        data.update(overrides)
        return self.client.post('/api/auth/register/', data, format='json')

    def test_register(self):
        """Test registering returns user and JWT tokens"""
        response = self.register()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['email'], 'ada@example.com')
        self.assertIn('access', response.data['tokens'])
        self.assertIn('refresh', response.data['tokens'])
        self.assertTrue(User.objects.filter(email='ada@example.com').exists())

    def test_register_duplicate_email(self):
        self.register()
        response = self.register()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_register_mismatched_passwords(self):
        response = self.register(password_confirm='DifferentPass123')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_register_short_password(self):
        response = self.register(password='short', password_confirm='short')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_token_and_profile(self):
        """Test obtaining a token and reading the profile with it"""
        self.register()
        response = self.client.post('/api/auth/token/', {
            'email': 'ada@example.com',
            'password': 'SecurePass123'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = self.client.get('/api/auth/profile/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['first_name'], 'Ada')

    def test_update_profile(self):
        user = User.objects.create_user(email='ada@example.com', password='testpass123')
        self.client.force_authenticate(user=user)
        response = self.client.patch('/api/auth/profile/', {'last_name': 'Eze'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user.refresh_from_db()
        self.assertEqual(user.last_name, 'Eze')

    def test_profile_unauthenticated(self):
        response = self.client.get('/api/auth/profile/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
