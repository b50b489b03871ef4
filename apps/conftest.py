# =============================================================================
# apps/conftest.py - shared pytest fixtures
# =============================================================================

import json
from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth.models import User

from apps.budgets.models import Category, Budget, Expense
from apps.projects.models import Project, Manager


# =============================================================================
# Users / clients
# =============================================================================

@pytest.fixture
def user(db):
    """Default test user"""
    return User.objects.create_user(
        username='testuser',
        email='test@example.com',
        password='testpass123'
    )


@pytest.fixture
def authenticated_client(client, user):
    """Logged-in client"""
    client.login(username='testuser', password='testpass123')
    return client


@pytest.fixture
def send_json(authenticated_client):
    """Send a JSON body with any method: send_json('post', url, {...})"""
    def _send(method, url, payload):
        body = payload if isinstance(payload, str) else json.dumps(payload)
        return getattr(authenticated_client, method)(url, data=body, content_type='application/json')
    return _send


# =============================================================================
# Domain objects
# =============================================================================

@pytest.fixture
def project(db):
    return Project.objects.create(name='Project Alpha')


@pytest.fixture
def manager(db):
    return Manager.objects.create(name='Alice Smith')


@pytest.fixture
def category(db):
    return Category.objects.create(name='Consultancy', color='#22c55e')


@pytest.fixture
def budget(db, project, category):
    return Budget.objects.create(
        name='Alpha Budget',
        total_amount=Decimal('50000.00'),
        project=project,
        category=category,
    )


@pytest.fixture
def expense(db, budget, category):
    return Expense.objects.create(
        amount=Decimal('1500.23'),
        description='Initial consultancy fee',
        date=date(2025, 1, 2),
        budget=budget,
        category=category,
    )
