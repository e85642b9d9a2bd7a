from django.urls import path
from .views import LoanPaymentsView, PaymentDetailView

urlpatterns = [
    path("", LoanPaymentsView.as_view(), name="loan-payments"),
    path("<int:payment_id>/", PaymentDetailView.as_view(), name="payment-detail"),
]
