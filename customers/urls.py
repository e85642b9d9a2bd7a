from django.urls import path
from .views import CustomerListCreateView, CustomerDetailView, CustomerStatsView

urlpatterns = [
    path("", CustomerListCreateView.as_view(), name="customer-list"),
    path("<int:customer_id>/", CustomerDetailView.as_view(), name="customer-detail"),
    path("<int:customer_id>/stats/", CustomerStatsView.as_view(), name="customer-stats"),
]
