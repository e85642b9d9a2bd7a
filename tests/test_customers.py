import pytest
from decimal import Decimal
from unittest import mock
from rest_framework import status
from customers.models import Customer
from conftest import customers_url


@pytest.mark.django_db
class TestCustomerCreation:
    """Test POST /api/customers/"""

    def test_create_customer(self, owner_client, owner_user):
        response = owner_client.post(
            customers_url(),
            {"name": "Saraa", "register": "АА01010101", "phone": "88001122"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["name"] == "Saraa"
        assert response.data["loan_count"] == 0
        assert Customer.objects.get(id=response.data["id"]).owner == owner_user

    def test_create_customer_without_name(self, owner_client):
        response = owner_client.post(customers_url(), {"phone": "1"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "name" in response.data

    def test_create_customer_duplicate_register(self, owner_client, sample_customer):
        response = owner_client.post(
            customers_url(),
            {"name": "Someone else", "register": sample_customer.register},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already exists" in response.data["error"]

    def test_duplicate_register_caught_by_constraint(self, owner_client, sample_customer):
        # Another request can insert the same register after the lookup ran
        with mock.patch("customers.views._register_taken", return_value=False):
            response = owner_client.post(
                customers_url(),
                {"name": "Someone else", "register": sample_customer.register},
                format="json",
            )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already exists" in response.data["error"]
        assert Customer.objects.filter(register=sample_customer.register).count() == 1

    def test_same_register_for_different_owners(self, other_client, sample_customer):
        response = other_client.post(
            customers_url(),
            {"name": "Bat", "register": sample_customer.register},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED

    def test_customers_without_register(self, owner_client):
        for name in ("One", "Two"):
            response = owner_client.post(
                customers_url(), {"name": name, "register": ""}, format="json"
            )
            assert response.status_code == status.HTTP_201_CREATED
            assert response.data["register"] is None


@pytest.mark.django_db
class TestCustomerRetrieval:
    """Test listing and detail lookups"""

    def test_list_customers_with_loan_count(self, owner_client, sample_customer, borrowed_loan):
        response = owner_client.get(customers_url())

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]["id"] == sample_customer.id
        assert response.data[0]["loan_count"] == 1

    def test_customer_detail_includes_loans(self, owner_client, sample_customer, borrowed_loan):
        response = owner_client.get(customers_url(f"{sample_customer.id}/"))

        assert response.status_code == status.HTTP_200_OK
        assert [loan["id"] for loan in response.data["loans"]] == [borrowed_loan.id]

    def test_other_users_customer_is_not_found(self, other_client, sample_customer):
        response = other_client.get(customers_url(f"{sample_customer.id}/"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error"] == "Customer not found"

    def test_list_hides_other_users_customers(self, other_client, sample_customer):
        response = other_client.get(customers_url())

        assert response.data == []


@pytest.mark.django_db
class TestCustomerUpdate:
    """Test PUT /api/customers/<id>/"""

    def test_update_phone_only(self, owner_client, sample_customer):
        response = owner_client.put(
            customers_url(f"{sample_customer.id}/"), {"phone": "95959595"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        sample_customer.refresh_from_db()
        assert sample_customer.phone == "95959595"
        assert sample_customer.name == "Bat Dorj"

    def test_update_to_duplicate_register(self, owner_client, owner_user, sample_customer):
        other = Customer.objects.create(owner=owner_user, name="Tuya", register="ЖЖ11")

        response = owner_client.put(
            customers_url(f"{other.id}/"),
            {"register": sample_customer.register},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already exists" in response.data["error"]

    def test_update_duplicate_caught_by_constraint(
        self, owner_client, owner_user, sample_customer
    ):
        other = Customer.objects.create(owner=owner_user, name="Tuya", register="ЖЖ11")

        with mock.patch("customers.views._register_taken", return_value=False):
            response = owner_client.put(
                customers_url(f"{other.id}/"),
                {"register": sample_customer.register},
                format="json",
            )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already exists" in response.data["error"]
        other.refresh_from_db()
        assert other.register == "ЖЖ11"

    def test_update_keeping_own_register(self, owner_client, sample_customer):
        response = owner_client.put(
            customers_url(f"{sample_customer.id}/"),
            {"name": "Bat-Erdene", "register": sample_customer.register},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["name"] == "Bat-Erdene"


@pytest.mark.django_db
class TestCustomerDeletion:
    """Test DELETE /api/customers/<id>/"""

    def test_delete_customer(self, owner_client, sample_customer):
        response = owner_client.delete(customers_url(f"{sample_customer.id}/"))

        assert response.status_code == status.HTTP_200_OK
        assert not Customer.objects.filter(id=sample_customer.id).exists()

    def test_delete_customer_with_loans(self, owner_client, sample_customer, borrowed_loan):
        response = owner_client.delete(customers_url(f"{sample_customer.id}/"))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "still has loans" in response.data["error"]
        assert Customer.objects.filter(id=sample_customer.id).exists()

    def test_delete_other_users_customer(self, other_client, sample_customer):
        response = other_client.delete(customers_url(f"{sample_customer.id}/"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Customer.objects.filter(id=sample_customer.id).exists()


@pytest.mark.django_db
class TestCustomerStats:
    """Test GET /api/customers/<id>/stats/"""

    def test_customer_stats_cover_every_status(
        self, owner_client, ledger, sample_customer, borrowed_loan
    ):
        lent = ledger.create_loan(
            principal=Decimal("8000"), kind="LENT", customer_id=sample_customer.id
        )
        ledger.add_payment(lent.id, Decimal("3000"))
        settled = ledger.create_loan(
            principal=Decimal("1000"), kind="LENT", customer_id=sample_customer.id
        )
        ledger.mark_fully_paid(settled.id)

        response = owner_client.get(customers_url(f"{sample_customer.id}/stats/"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["customer"]["name"] == "Bat Dorj"
        assert response.data["lent"]["count"] == 2
        assert Decimal(response.data["lent"]["total_amount"]) == Decimal("9000.00")
        assert Decimal(response.data["lent"]["remaining"]) == Decimal("5000.00")
        assert response.data["borrowed"]["count"] == 1
        assert Decimal(response.data["borrowed"]["remaining"]) == Decimal("50000.00")
        assert Decimal(response.data["net_balance"]) == Decimal("-45000.00")

    def test_stats_of_missing_customer(self, owner_client):
        response = owner_client.get(customers_url("999/stats/"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
