from rest_framework import serializers
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            "id",
            "loan",
            "amount",
            "payment_date",
            "description",
            "created_at",
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    """Input for recording a payment; the amount is checked against the loan by the ledger."""

    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    payment_date = serializers.DateTimeField(required=False, allow_null=True)
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
