"""Views for authentication flows (register, login, logout, profile, password change)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import (
    RegisterSerializer,
    LoginSerializer,
    LogoutSerializer,
    UpdatePasswordSerializer,
)
from .serializers import UpdateDetailsSerializer, UserSerializer


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


class RegisterView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"success": True, "message": "Logged out successfully"}, status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response(UserSerializer(request.user).data)


class UpdateDetailsView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request):  # type: ignore
        serializer = UpdateDetailsSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)


class UpdatePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request):  # type: ignore
        serializer = UpdatePasswordSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data)
