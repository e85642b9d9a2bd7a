from rest_framework import serializers
from .models import Customer


class CustomerSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "register", "phone"]


class CustomerSerializer(serializers.ModelSerializer):
    loan_count = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "register",
            "phone",
            "loan_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "loan_count", "created_at", "updated_at"]
        extra_kwargs = {
            "register": {"required": False, "allow_null": True, "allow_blank": True},
            "phone": {"required": False, "allow_null": True, "allow_blank": True},
        }
        # Uniqueness of register is checked per owner in the views
        validators = []

    def get_loan_count(self, obj):
        count = getattr(obj, "loan_count", None)
        if count is None:
            count = obj.loans.count()
        return count

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name is required")
        return value.strip()

    def validate_register(self, value):
        # Blank and missing registration numbers are stored the same way
        if value is None or not value.strip():
            return None
        return value.strip()
