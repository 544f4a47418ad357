"""
Shared pytest fixtures for the EMS backend test-suite.
"""
import itertools
from datetime import date
from decimal import Decimal

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from projects.models import Project
from users.models import User

_sequence = itertools.count(1)


@pytest.fixture(autouse=True)
def clear_cache():
    """Unread counters live in the local-memory cache; start every test clean."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    """Factory for users with sensible defaults. Keyword arguments override them."""

    def _make(**overrides):
        n = next(_sequence)
        password = overrides.pop("password", "secret123")
        fields = {
            "first_name": f"First{n}",
            "last_name": f"Last{n}",
            "middle_name": "Middle",
            "phone": "+100000000",
            "programming_language": "Python",
            "role": User.ROLE_EMPLOYEE,
        }
        fields.update(overrides)
        email = fields.pop("email", f"user{n}@example.com")
        return User.objects.create_user(email, password=password, **fields)

    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user(email="admin@example.com", role=User.ROLE_ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture
def employee(make_user):
    return make_user(
        email="employee@example.com",
        first_name="Eve",
        last_name="Employee",
        salary=Decimal("400.00"),
        birth_date=date(1995, 6, 15),
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def employee_client(employee):
    client = APIClient()
    client.force_authenticate(user=employee)
    return client


@pytest.fixture
def project(db):
    return Project.objects.create(
        name="Apollo",
        description="Internal CRM rebuild for the sales team.",
        wage=Decimal("25.00"),
    )
