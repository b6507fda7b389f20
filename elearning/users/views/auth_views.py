"""
E-Learning User Authentication Views

This module provides authentication endpoints for the E-Learning system.
The JWT pair is delivered in HTTP-only cookies; `backend.custom_auth`
reads the access token back from the cookie on every request.

Views:
- CustomTokenObtainPairView: Login, sets JWT cookies
- CustomTokenRefreshView: Rotates JWT cookies
- LogoutView: Blacklists the refresh token and clears cookies
- UserRegistrationView: Public sign-up

Author: DSP Development Team
Version: 1.0.0
"""

import logging

from django.conf import settings
from django.utils.translation import gettext_lazy as _
from rest_framework import status, generics
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from ..serializers import CustomTokenObtainPairSerializer, UserRegistrationSerializer

logger = logging.getLogger(__name__)


def _set_jwt_cookies(response: Response, refresh=None, access=None) -> None:
    """
    Set `refresh_token` and `access_token` cookies with secure flags:
     * httponly=True → prevents JavaScript access (mitigates XSS attacks)
     * secure=True → transmits cookies only over HTTPS
     * samesite="None" → required for cross-site requests from the SPA
    """
    if refresh:
        response.set_cookie(
            "refresh_token",
            refresh,
            httponly=True,
            secure=True,
            samesite="None",
            path="/",
            max_age=settings.SIMPLE_JWT["REFRESH_TOKEN_LIFETIME"],
        )
    if access:
        response.set_cookie(
            "access_token",
            access,
            httponly=True,
            secure=True,
            samesite="None",
            path="/",
            max_age=settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"],
        )


class CustomTokenObtainPairView(TokenObtainPairView):
    """
    Login view storing the JWT pair in HTTP-only cookies instead of
    returning it in the response body.
    """

    serializer_class = CustomTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == 200:
            data = response.data
            refresh = data.pop("refresh", None)
            access = data.pop("access", None)
            _set_jwt_cookies(response, refresh=refresh, access=access)
        return response


class CustomTokenRefreshView(APIView):
    """
    Refresh the JWT pair from the `refresh_token` cookie and store the new
    tokens in cookies.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        refresh_token = request.COOKIES.get("refresh_token")
        if not refresh_token:
            return Response(
                {"detail": "Refresh token not provided"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = TokenRefreshSerializer(data={"refresh": refresh_token})
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data

        response = Response(status=status.HTTP_200_OK)
        _set_jwt_cookies(response, refresh=data.get("refresh"), access=data.get("access"))
        return response


class LogoutView(APIView):
    """
    Invalidate the refresh token (blacklist) and delete both JWT cookies.
    Always answers 205 Reset Content.
    """

    permission_classes = [AllowAny]

    def post(self, request):
        refresh_token = request.COOKIES.get("refresh_token")
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                logger.info("Logout with unusable refresh token: %s", e)

        response = Response({"detail": _("Successfully logged out.")}, status=205)
        response.delete_cookie("refresh_token", samesite="None")
        response.delete_cookie("access_token", samesite="None")
        return response


class UserRegistrationView(generics.CreateAPIView):
    """
    Public sign-up so new customers can buy courses.

    Request Body Example (JSON):
    {
        "username": "johndoe",
        "email": "johndoe@example.com",
        "password": "secret1234!",
        "password_confirm": "secret1234!"
    }
    """

    serializer_class = UserRegistrationSerializer
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered user %s", user.pk)
        return Response(
            {"detail": _("Registration successful.")},
            status=status.HTTP_201_CREATED,
        )
