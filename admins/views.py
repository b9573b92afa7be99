"""
views.py

Admin account endpoints: signup, login, profile, password change, logout.
Signup and login are public; everything else needs a bearer token.
"""
import logging

from django.db import transaction
from django.utils import timezone
from drf_yasg.utils import swagger_auto_schema
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from core.responses import created_response, success_response

from .authentication import OptionalAdminJWTAuthentication
from .models import Admin
from .serializers import (
    AdminSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    SignupSerializer,
)
from .tokens import issue_token

logger = logging.getLogger(__name__)


def session_payload(admin):
    return {'admin': AdminSerializer(admin).data, 'token': issue_token(admin)}


# ------------------------------------------------------------------
# Signup / login
# ------------------------------------------------------------------

class SignupView(APIView):
    authentication_classes = [OptionalAdminJWTAuthentication]
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_description="Create an admin account and return a bearer token.",
        request_body=SignupSerializer,
    )
    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            admin = serializer.save()
        return created_response(session_payload(admin), 'Admin created successfully')


class LoginView(APIView):
    authentication_classes = [OptionalAdminJWTAuthentication]
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_description="Exchange email and password for a bearer token (valid 7 days).",
        request_body=LoginSerializer,
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']

        admin = Admin.objects.filter(email=email).first()
        if admin is None:
            logger.warning('Login failed for unknown email %s', email)
            raise AuthenticationFailed('Invalid email or password')
        if not admin.is_active:
            logger.warning('Login refused for deactivated admin %s', email)
            raise AuthenticationFailed('Account is deactivated')
        if not admin.check_password(serializer.validated_data['password']):
            logger.warning('Login failed for %s: wrong password', email)
            raise AuthenticationFailed('Invalid email or password')

        admin.last_login = timezone.now()
        admin.save(update_fields=['last_login', 'updated_at'])
        logger.info('Admin %s logged in', email)
        return success_response(session_payload(admin), 'Login successful')


# ------------------------------------------------------------------
# Profile
# ------------------------------------------------------------------

class ProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Get the profile of the currently logged-in admin.",
        responses={200: AdminSerializer()},
    )
    def get(self, request):
        return success_response({'admin': AdminSerializer(request.user).data})

    @swagger_auto_schema(
        operation_description="Update full name and/or email of the logged-in admin.",
        request_body=ProfileUpdateSerializer,
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            admin = serializer.save()
        return success_response({'admin': AdminSerializer(admin).data}, 'Profile updated successfully')


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Change password of the logged-in admin.",
        request_body=ChangePasswordSerializer,
    )
    def put(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response(message='Password changed successfully')


class LogoutView(APIView):
    """Tokens are stateless; the client just drops its copy."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        logger.info('Admin %s logged out', request.user.email)
        return success_response(message='Logout successful')
