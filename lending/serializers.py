from rest_framework import serializers
from customers.serializers import CustomerSummarySerializer
from payment.serializers import PaymentSerializer
from .models import Loan


class LoanSerializer(serializers.ModelSerializer):
    customer = CustomerSummarySerializer(read_only=True)
    customer_id = serializers.IntegerField(read_only=True, allow_null=True)
    payments = PaymentSerializer(many=True, read_only=True)
    payment_count = serializers.SerializerMethodField()

    class Meta:
        model = Loan
        fields = [
            "id",
            "customer",
            "customer_id",
            "other_party",
            "principal",
            "remaining",
            "kind",
            "status",
            "opened_date",
            "due_date",
            "description",
            "payments",
            "payment_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_payment_count(self, obj):
        count = getattr(obj, "payment_count", None)
        if count is None:
            count = len(obj.payments.all())
        return count


class LoanSummarySerializer(serializers.ModelSerializer):
    """Loan without its payment list, used inside customer details."""

    class Meta:
        model = Loan
        fields = [
            "id",
            "other_party",
            "principal",
            "remaining",
            "kind",
            "status",
            "opened_date",
            "due_date",
            "description",
        ]
        read_only_fields = fields


class LoanCreateSerializer(serializers.Serializer):
    principal = serializers.DecimalField(max_digits=14, decimal_places=2)
    kind = serializers.ChoiceField(choices=Loan.KIND_CHOICES)
    customer_id = serializers.IntegerField(required=False, allow_null=True)
    other_party = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
    opened_date = serializers.DateTimeField(required=False, allow_null=True)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )


class LoanUpdateSerializer(serializers.Serializer):
    """Every field is optional; only the ones sent are changed."""

    principal = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False
    )
    customer_id = serializers.IntegerField(required=False, allow_null=True)
    other_party = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
    opened_date = serializers.DateTimeField(required=False, allow_null=True)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    status = serializers.ChoiceField(choices=Loan.STATUS_CHOICES, required=False)


class KindTotalsSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    total = serializers.DecimalField(max_digits=16, decimal_places=2)


class LoanStatisticsSerializer(serializers.Serializer):
    borrowed = KindTotalsSerializer()
    lent = KindTotalsSerializer()
    net_balance = serializers.DecimalField(max_digits=16, decimal_places=2)
