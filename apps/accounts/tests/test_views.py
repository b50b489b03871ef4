# =============================================================================
# accounts/tests/test_views.py - login / logout
# =============================================================================

import pytest
from django.urls import reverse


@pytest.mark.django_db
class TestLoginView:

    def test_login_page(self, client):
        response = client.get(reverse('accounts:login'))

        assert response.status_code == 200
        assert 'accounts/login.html' in [t.name for t in response.templates]

    def test_login_success_redirects_to_dashboard(self, client, user):
        response = client.post(reverse('accounts:login'), {
            'username': 'testuser',
            'password': 'testpass123',
        })

        assert response.status_code == 302
        assert response.url == reverse('dashboard:home')

    def test_login_wrong_password(self, client, user):
        response = client.post(reverse('accounts:login'), {
            'username': 'testuser',
            'password': 'wrong',
        })

        assert response.status_code == 200
        assert response.context['form'].errors

    def test_logged_in_user_is_redirected(self, authenticated_client):
        response = authenticated_client.get(reverse('accounts:login'))
        assert response.status_code == 302


@pytest.mark.django_db
class TestLogoutView:

    def test_logout(self, authenticated_client):
        response = authenticated_client.post(reverse('accounts:logout'))

        assert response.status_code == 302
        assert response.url == reverse('accounts:login')

        response = authenticated_client.get(reverse('dashboard:home'))
        assert response.status_code == 302
