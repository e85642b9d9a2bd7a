from django.contrib import admin
from payment.models import Payment
from .models import Loan


class PaymentInline(admin.TabularInline):
    # Read-only: payments change the balance and go through the ledger
    model = Payment
    extra = 0
    readonly_fields = ["amount", "payment_date", "description", "created_at"]
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Loan)
class LoanAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "owner",
        "kind",
        "counterparty",
        "principal",
        "remaining",
        "status",
        "opened_date",
        "due_date",
    ]
    list_filter = ["kind", "status"]
    search_fields = ["other_party", "customer__name", "description"]
    inlines = [PaymentInline]

    def get_readonly_fields(self, request, obj=None):
        # The balance only moves through payments once the loan exists
        if obj is None:
            return ["remaining", "created_at", "updated_at"]
        return ["principal", "remaining", "created_at", "updated_at"]

    def save_model(self, request, obj, form, change):
        if not change:
            obj.remaining = obj.principal
            obj.status = Loan.STATUS_ACTIVE
        super().save_model(request, obj, form, change)
