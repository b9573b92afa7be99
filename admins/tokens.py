"""
Bearer tokens for admins.

Tokens are signed JWTs carrying the admin id (``adminId`` claim) and a 7 day
expiry. Nothing is stored server-side, so a token stays valid until it
expires; logging out only means the client forgets it.
"""
from datetime import datetime, timezone

import jwt
from django.core.exceptions import ValidationError
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from .models import Admin


class TokenVerificationError(Exception):
    pass


class TokenInvalid(TokenVerificationError):
    pass


class TokenExpired(TokenVerificationError):
    pass


def issue_token(admin):
    return str(AccessToken.for_user(admin))


def _signature_valid_but_expired(raw_token):
    try:
        payload = jwt.decode(
            raw_token,
            api_settings.SIGNING_KEY,
            algorithms=[api_settings.ALGORITHM],
            options={'verify_exp': False},
        )
    except jwt.InvalidTokenError:
        return False
    exp = payload.get('exp')
    return exp is not None and exp < datetime.now(tz=timezone.utc).timestamp()


def verify_token(raw_token):
    """
    Return ``{'adminId': ..., 'expiry': datetime}`` for a valid token.

    Raises TokenExpired when the signature checks out but the token is past
    its expiry, TokenInvalid for anything else (tampered, malformed, wrong key).
    """
    if isinstance(raw_token, bytes):
        raw_token = raw_token.decode()
    try:
        token = AccessToken(raw_token)
    except TokenError:
        if _signature_valid_but_expired(raw_token):
            raise TokenExpired('Token expired')
        raise TokenInvalid('Invalid token')

    admin_id = token.get(api_settings.USER_ID_CLAIM)
    if admin_id is None:
        raise TokenInvalid('Invalid token')
    # Newer simplejwt releases write the claim as a string
    try:
        admin_id = Admin._meta.pk.to_python(admin_id)
    except ValidationError:
        raise TokenInvalid('Invalid token')
    return {
        'adminId': admin_id,
        'expiry': datetime.fromtimestamp(token['exp'], tz=timezone.utc),
    }
