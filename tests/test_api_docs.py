import pytest
from rest_framework import status


@pytest.mark.django_db
class TestApiDocumentation:
    """Test the generated OpenAPI document"""

    def test_schema_lists_loan_routes(self, api_client):
        response = api_client.get("/docs/?format=openapi")

        assert response.status_code == status.HTTP_200_OK
        paths = response.json()["paths"]
        assert any(path.endswith("/loans/{loan_id}/payments/") for path in paths)
        assert any(path.endswith("/loans/stats/") for path in paths)

    def test_root_redirects_to_docs(self, api_client):
        response = api_client.get("/")

        assert response.status_code == status.HTTP_302_FOUND
        assert response["Location"] == "/docs/"
