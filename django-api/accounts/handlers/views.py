"""HTTP handlers for authentication and the caller's own profile."""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from accounts import services
from accounts.handlers.serializers import (
    ChangePasswordSerializer,
    LoginSerializer,
    LogoutSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)
from accounts.permissions import IsShopper


def _session_payload(user, status_code: int = status.HTTP_200_OK) -> Response:
    tokens = services.issue_tokens(user)
    return Response(
        {
            "access": tokens.access,
            "refresh": tokens.refresh,
            "user": UserSerializer(user).data,
        },
        status=status_code,
    )


class RegisterView(APIView):
    """Handler for POST /api/auth/register"""

    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.register_user(**serializer.validated_data)
        return _session_payload(user, status.HTTP_201_CREATED)


class LoginView(APIView):
    """Handler for POST /api/auth/login"""

    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"
    admin_only = False

    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.authenticate_user(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
            admin_only=self.admin_only,
        )
        return _session_payload(user)


class AdminLoginView(LoginView):
    """Handler for POST /api/auth/admin/login"""

    admin_only = True


class MeView(APIView):
    """Handler for GET /api/auth/me"""

    permission_classes = [IsShopper]

    def get(self, request: Request) -> Response:
        return Response(UserSerializer(request.user).data)


class ProfileView(APIView):
    """Handler for PUT /api/auth/profile"""

    permission_classes = [IsShopper]

    def put(self, request: Request) -> Response:
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.update_profile(request.user, **serializer.validated_data)
        return Response(UserSerializer(user).data)


class ChangePasswordView(APIView):
    """Handler for POST /api/auth/change-password"""

    permission_classes = [IsShopper]

    def post(self, request: Request) -> Response:
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.change_password(
            request.user,
            serializer.validated_data["current_password"],
            serializer.validated_data["new_password"],
        )
        return Response({"detail": "Password changed."})


class LogoutView(APIView):
    """Handler for POST /api/auth/logout"""

    permission_classes = [IsShopper]

    def post(self, request: Request) -> Response:
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        refresh = serializer.validated_data.get("refresh")
        if refresh:
            services.revoke_refresh_token(refresh)
        return Response({"detail": "Logged out."})
