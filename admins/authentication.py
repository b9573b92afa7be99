import logging

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import AUTH_HEADER_TYPE_BYTES, JWTAuthentication

from .models import Admin
from .tokens import TokenExpired, TokenInvalid, verify_token

logger = logging.getLogger(__name__)


class AdminJWTAuthentication(JWTAuthentication):
    """
    Resolves ``Authorization: Bearer <token>`` to an active Admin.

    Without a bearer token the request stays anonymous and the permission
    layer answers 401 "Access token is required".
    """

    def get_bearer_token(self, request):
        header = self.get_header(request)
        if header is None:
            return None
        parts = header.split()
        if len(parts) != 2 or parts[0] not in AUTH_HEADER_TYPE_BYTES:
            return None
        return parts[1].decode()

    def authenticate(self, request):
        raw_token = self.get_bearer_token(request)
        if raw_token is None:
            return None

        try:
            payload = verify_token(raw_token)
        except TokenExpired:
            raise AuthenticationFailed('Token expired', code='token_expired')
        except TokenInvalid:
            raise AuthenticationFailed('Invalid token', code='token_not_valid')

        return self.get_admin(payload['adminId']), raw_token

    def get_admin(self, admin_id):
        admin = Admin.objects.filter(pk=admin_id, is_active=True).first()
        if admin is None:
            logger.warning('Rejected token for missing or inactive admin %s', admin_id)
            raise AuthenticationFailed('Invalid or inactive admin account', code='user_inactive')
        return admin


class OptionalAdminJWTAuthentication(AdminJWTAuthentication):
    """Same resolution, but any failure leaves the request anonymous"""

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except AuthenticationFailed:
            return None
