import logging
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import permissions, status
from rest_framework.authtoken.models import Token
from drf_yasg.utils import swagger_auto_schema
from .serializers import CreateUserSerializer, UserSerializer

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """
    Create a new user and return an API token for it.

    Expected input:
    - username: Unique username
    - email: User email
    - password: Password (min 8 characters)
    - first_name, last_name: optional
    """

    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(request_body=CreateUserSerializer)
    def post(self, request):
        serializer = CreateUserSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = serializer.save()
        token, _ = Token.objects.get_or_create(user=user)
        logger.info(f"User {user.pk} registered")
        return Response(
            {"user": UserSerializer(user).data, "token": token.key},
            status=status.HTTP_201_CREATED,
        )


class MeView(APIView):
    """The authenticated user."""

    def get(self, request):
        return Response(UserSerializer(request.user).data)


class LogoutView(APIView):
    """Revoke the caller's API token."""

    def post(self, request):
        Token.objects.filter(user=request.user).delete()
        logger.info(f"User {request.user.pk} logged out")
        return Response({"success": True, "message": "Logged out"})
