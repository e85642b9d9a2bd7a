from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_yasg.utils import swagger_auto_schema
from .serializers import (
    LoanSerializer,
    LoanCreateSerializer,
    LoanUpdateSerializer,
    LoanStatisticsSerializer,
)
from .services import OwnerLedger


class LoanListCreateView(APIView):
    """
    List the authenticated user's loans or record a new one.

    Expected input for POST:
    - principal: Amount borrowed or lent (must be positive)
    - kind: "BORROWED" or "LENT"
    - customer_id: ID of a registered customer (optional)
    - other_party: Free-text counterparty name (optional)
    - opened_date: When the loan was made (optional, default: now)
    - due_date: When it should be settled (optional)
    - description: Notes (optional)

    One of customer_id or other_party is required.
    """

    @swagger_auto_schema(responses={200: LoanSerializer(many=True)})
    def get(self, request):
        loans = OwnerLedger(request.user).list_loans()
        return Response(LoanSerializer(loans, many=True).data)

    @swagger_auto_schema(
        request_body=LoanCreateSerializer, responses={201: LoanSerializer}
    )
    def post(self, request):
        serializer = LoanCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        loan = OwnerLedger(request.user).create_loan(**serializer.validated_data)
        return Response(LoanSerializer(loan).data, status=status.HTTP_201_CREATED)


class LoanStatsView(APIView):
    """
    Totals of the user's ACTIVE loans, split by kind.

    net_balance is what others owe the user minus what the user owes.
    """

    @swagger_auto_schema(responses={200: LoanStatisticsSerializer})
    def get(self, request):
        stats = OwnerLedger(request.user).statistics()
        return Response(LoanStatisticsSerializer(stats).data)


class LoanDetailView(APIView):
    """
    Retrieve, update or delete one loan including its payment history.

    PUT accepts any subset of: principal, customer_id, other_party,
    opened_date, due_date, description, status. Changing the principal
    keeps the amount already paid and recomputes the remaining balance.
    """

    @swagger_auto_schema(responses={200: LoanSerializer})
    def get(self, request, loan_id):
        loan = OwnerLedger(request.user).get_loan(loan_id)
        return Response(LoanSerializer(loan).data)

    @swagger_auto_schema(
        request_body=LoanUpdateSerializer, responses={200: LoanSerializer}
    )
    def put(self, request, loan_id):
        serializer = LoanUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        loan = OwnerLedger(request.user).edit_loan(loan_id, serializer.validated_data)
        return Response(LoanSerializer(loan).data)

    def delete(self, request, loan_id):
        OwnerLedger(request.user).delete_loan(loan_id)
        return Response({"message": "Loan deleted successfully"})


class MarkLoanPaidView(APIView):
    """
    Settle a loan in full.

    Records one payment for whatever is still owed, then marks the loan PAID.
    """

    @swagger_auto_schema(responses={200: LoanSerializer})
    def patch(self, request, loan_id):
        loan = OwnerLedger(request.user).mark_fully_paid(loan_id)
        return Response(LoanSerializer(loan).data)
