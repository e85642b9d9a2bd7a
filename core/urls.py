from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView
from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="Loan Tracker API Documentation",
        default_version="v1",
        description="Track money you borrowed and lent, and the payments made against it.",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/", include("accounts.urls")),
    path("api/customers/", include("customers.urls")),
    path("api/loans/", include("lending.urls")),
    path("api/loans/<int:loan_id>/payments/", include("payment.urls")),
    path("docs/", schema_view.with_ui("swagger"), name="swagger-docs"),
    path("", RedirectView.as_view(pattern_name="swagger-docs", permanent=False)),
]
