from django.urls import path
from .views import (
    LoanListCreateView,
    LoanStatsView,
    LoanDetailView,
    MarkLoanPaidView,
)

urlpatterns = [
    path("", LoanListCreateView.as_view(), name="loan-list"),
    path("stats/", LoanStatsView.as_view(), name="loan-stats"),
    path("<int:loan_id>/", LoanDetailView.as_view(), name="loan-detail"),
    path("<int:loan_id>/paid/", MarkLoanPaidView.as_view(), name="loan-mark-paid"),
]
