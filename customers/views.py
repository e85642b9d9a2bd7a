import logging
from decimal import Decimal
from django.db import IntegrityError, transaction
from django.db.models import Count
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_yasg.utils import swagger_auto_schema
from lending.models import Loan
from lending.serializers import LoanSummarySerializer
from .models import Customer
from .serializers import CustomerSerializer, CustomerSummarySerializer

logger = logging.getLogger(__name__)

DUPLICATE_REGISTER_ERROR = "A customer with this registration number already exists"


def _owned_customers(user):
    return Customer.objects.owned_by(user).annotate(loan_count=Count("loans"))


def _register_taken(user, register, exclude_id=None):
    if not register:
        return False
    duplicates = Customer.objects.owned_by(user).filter(register=register)
    if exclude_id is not None:
        duplicates = duplicates.exclude(id=exclude_id)
    return duplicates.exists()


def _save_unique(serializer, **kwargs):
    # The register check above can lose a race; the unique constraint decides
    try:
        with transaction.atomic():
            return serializer.save(**kwargs)
    except IntegrityError:
        logger.warning("Duplicate customer register rejected by the database")
        return None


class CustomerListCreateView(APIView):
    """
    List the authenticated user's customers or register a new one.

    Expected input for POST:
    - name: Customer name (required)
    - register: National registration number (optional, unique per user)
    - phone: Phone number (optional)
    """

    @swagger_auto_schema(responses={200: CustomerSerializer(many=True)})
    def get(self, request):
        customers = _owned_customers(request.user)
        return Response(CustomerSerializer(customers, many=True).data)

    @swagger_auto_schema(
        request_body=CustomerSerializer, responses={201: CustomerSerializer}
    )
    def post(self, request):
        serializer = CustomerSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        if _register_taken(request.user, serializer.validated_data.get("register")):
            return Response(
                {"error": DUPLICATE_REGISTER_ERROR},
                status=status.HTTP_400_BAD_REQUEST,
            )

        customer = _save_unique(serializer, owner=request.user)
        if customer is None:
            return Response(
                {"error": DUPLICATE_REGISTER_ERROR},
                status=status.HTTP_400_BAD_REQUEST,
            )
        logger.info(f"Customer {customer.id} created for user {request.user.pk}")
        return Response(
            CustomerSerializer(customer).data, status=status.HTTP_201_CREATED
        )


class CustomerDetailView(APIView):
    """
    Retrieve, update or delete a customer.

    A customer that still has loans cannot be deleted.
    """

    def get(self, request, customer_id):
        try:
            customer = _owned_customers(request.user).get(id=customer_id)
        except Customer.DoesNotExist:
            return Response(
                {"error": "Customer not found"}, status=status.HTTP_404_NOT_FOUND
            )

        data = CustomerSerializer(customer).data
        data["loans"] = LoanSummarySerializer(customer.loans.all(), many=True).data
        return Response(data)

    @swagger_auto_schema(
        request_body=CustomerSerializer, responses={200: CustomerSerializer}
    )
    def put(self, request, customer_id):
        try:
            customer = _owned_customers(request.user).get(id=customer_id)
        except Customer.DoesNotExist:
            return Response(
                {"error": "Customer not found"}, status=status.HTTP_404_NOT_FOUND
            )

        serializer = CustomerSerializer(customer, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        register = serializer.validated_data.get("register")
        if register and register != customer.register:
            if _register_taken(request.user, register, exclude_id=customer.id):
                return Response(
                    {"error": DUPLICATE_REGISTER_ERROR},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        customer = _save_unique(serializer)
        if customer is None:
            return Response(
                {"error": DUPLICATE_REGISTER_ERROR},
                status=status.HTTP_400_BAD_REQUEST,
            )
        logger.info(f"Customer {customer.id} updated")
        return Response(CustomerSerializer(customer).data)

    def delete(self, request, customer_id):
        try:
            customer = _owned_customers(request.user).get(id=customer_id)
        except Customer.DoesNotExist:
            return Response(
                {"error": "Customer not found"}, status=status.HTTP_404_NOT_FOUND
            )

        if customer.loan_count > 0:
            logger.warning(
                f"Refused to delete customer {customer.id}: {customer.loan_count} loans reference it"
            )
            return Response(
                {"error": "Cannot delete a customer that still has loans"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        customer.delete()
        logger.info(f"Customer {customer_id} deleted")
        return Response({"message": "Customer deleted successfully"})


class CustomerStatsView(APIView):
    """
    Borrowed and lent totals for one customer.

    Unlike the loan statistics, every loan counts here whatever its status.
    """

    def get(self, request, customer_id):
        try:
            customer = Customer.objects.owned_by(request.user).get(id=customer_id)
        except Customer.DoesNotExist:
            return Response(
                {"error": "Customer not found"}, status=status.HTTP_404_NOT_FOUND
            )

        loans = list(customer.loans.all())
        totals = {}
        for kind, key in ((Loan.KIND_BORROWED, "borrowed"), (Loan.KIND_LENT, "lent")):
            of_kind = [loan for loan in loans if loan.kind == kind]
            totals[key] = {
                "count": len(of_kind),
                "total_amount": sum((loan.principal for loan in of_kind), Decimal("0.00")),
                "remaining": sum((loan.remaining for loan in of_kind), Decimal("0.00")),
            }

        net_balance = totals["lent"]["remaining"] - totals["borrowed"]["remaining"]

        return Response(
            {
                "customer": CustomerSummarySerializer(customer).data,
                "borrowed": {
                    "count": totals["borrowed"]["count"],
                    "total_amount": str(totals["borrowed"]["total_amount"]),
                    "remaining": str(totals["borrowed"]["remaining"]),
                },
                "lent": {
                    "count": totals["lent"]["count"],
                    "total_amount": str(totals["lent"]["total_amount"]),
                    "remaining": str(totals["lent"]["remaining"]),
                },
                "net_balance": str(net_balance),
            }
        )
