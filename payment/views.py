from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_yasg.utils import swagger_auto_schema
from .serializers import PaymentSerializer, PaymentCreateSerializer
from lending.serializers import LoanSerializer
from lending.services import OwnerLedger


class LoanPaymentsView(APIView):
    """
    Payment history of a loan, or record a partial payment against it.

    Expected input for POST:
    - amount: Amount paid (positive, at most the remaining balance)
    - payment_date: When it was paid (optional, default: now)
    - description: Notes (optional)

    POST returns the updated loan. A payment that brings the remaining
    balance to zero marks the loan PAID.
    """

    @swagger_auto_schema(responses={200: PaymentSerializer(many=True)})
    def get(self, request, loan_id):
        payments = OwnerLedger(request.user).payment_history(loan_id)
        return Response(PaymentSerializer(payments, many=True).data)

    @swagger_auto_schema(
        request_body=PaymentCreateSerializer, responses={200: LoanSerializer}
    )
    def post(self, request, loan_id):
        serializer = PaymentCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        loan = OwnerLedger(request.user).add_payment(
            loan_id, **serializer.validated_data
        )
        return Response(LoanSerializer(loan).data)


class PaymentDetailView(APIView):
    """
    Delete a payment.

    The amount goes back onto the loan's remaining balance and the loan
    returns to ACTIVE.
    """

    @swagger_auto_schema(responses={200: LoanSerializer})
    def delete(self, request, loan_id, payment_id):
        loan = OwnerLedger(request.user).remove_payment(loan_id, payment_id)
        return Response(LoanSerializer(loan).data)
