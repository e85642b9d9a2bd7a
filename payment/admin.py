from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    # View only: adding or removing a payment must also move the loan balance
    list_display = [
        "id",
        "loan",
        "amount",
        "payment_date",
        "description",
        "created_at",
    ]
    list_filter = ["payment_date"]
    ordering = ["loan", "-payment_date"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
