import os
import django
from django.conf import settings

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core.settings")
django.setup()

import pytest
from django.contrib.auth.models import User
from django.utils import timezone
from dateutil.relativedelta import relativedelta
from rest_framework.test import APIClient
from decimal import Decimal
from customers.models import Customer
from lending.services import OwnerLedger


@pytest.fixture
def api_client():
    """Returns API client for making requests"""
    return APIClient()


def loans_url(path=""):
    """Helper to build loan API URLs"""
    return f"/api/loans/{path.lstrip('/')}"


def customers_url(path=""):
    """Helper to build customer API URLs"""
    return f"/api/customers/{path.lstrip('/')}"


def auth_url(path=""):
    """Helper to build account API URLs"""
    return f"/api/auth/{path.lstrip('/')}"


@pytest.fixture
def owner_user():
    """Creates the user who owns the loans under test"""
    return User.objects.create_user(
        username="test_owner", email="owner@test.com", password="testpass123"
    )


@pytest.fixture
def other_user():
    """Creates a second user whose data must stay invisible to the owner"""
    return User.objects.create_user(
        username="test_other", email="other@test.com", password="testpass123"
    )


@pytest.fixture
def owner_client(owner_user):
    """API client authenticated as the owner"""
    client = APIClient()
    client.force_authenticate(user=owner_user)
    return client


@pytest.fixture
def other_client(other_user):
    """API client authenticated as the other user"""
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture
def ledger(owner_user):
    """Loan ledger scoped to the owner"""
    return OwnerLedger(owner_user)


@pytest.fixture
def other_ledger(other_user):
    """Loan ledger scoped to the other user"""
    return OwnerLedger(other_user)


@pytest.fixture
def sample_customer(owner_user):
    """Creates a registered counterparty for the owner"""
    return Customer.objects.create(
        owner=owner_user, name="Bat Dorj", register="УБ99112233", phone="99112233"
    )


@pytest.fixture
def lent_loan(ledger):
    """Money the owner lent to a free-text counterparty"""
    return ledger.create_loan(
        principal=Decimal("100000.00"), kind="LENT", other_party="A"
    )


@pytest.fixture
def borrowed_loan(ledger, sample_customer):
    """Money the owner borrowed from a registered customer, due in three months"""
    return ledger.create_loan(
        principal=Decimal("50000.00"),
        kind="BORROWED",
        customer_id=sample_customer.id,
        due_date=timezone.now() + relativedelta(months=3),
        description="Rent advance",
    )
