"""
JWT issuance and bearer-token validation.

Tokens are stateless: nothing is stored server side, every request
re-validates the signature and re-resolves the user from the subject claim.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

import jwt
from django.contrib.auth import get_user_model

from .conf import api_settings
from .exceptions import Unauthorized

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class IssuedToken:
    token: str
    jti: str
    expires_at: datetime


def issue_token(user, now=None):
    """
    Sign a token for ``user``.

    Claims: ``sub`` is the username (the email address), ``jti`` a unique
    id, plus ``iss``/``aud``/``iat``/``exp``. ``now`` is only overridden in
    tests.
    """
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + api_settings.JWT_LIFETIME
    jti = uuid.uuid4().hex
    payload = {
        "sub": user.get_username(),
        "jti": jti,
        "iss": api_settings.JWT_ISSUER,
        "aud": api_settings.JWT_AUDIENCE,
        "iat": issued_at,
        "exp": expires_at,
    }
    token = jwt.encode(
        payload,
        api_settings.JWT_SIGNING_KEY,
        algorithm=api_settings.JWT_ALGORITHM,
    )
    return IssuedToken(token=token, jti=jti, expires_at=expires_at)


def decode_token(token):
    """Return the verified claims of ``token`` or raise Unauthorized."""
    try:
        return jwt.decode(
            token,
            api_settings.JWT_SIGNING_KEY,
            algorithms=[api_settings.JWT_ALGORITHM],
            audience=api_settings.JWT_AUDIENCE,
            issuer=api_settings.JWT_ISSUER,
            leeway=0,
            options={"require": ["exp", "iat", "sub", "iss", "aud"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired.")
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise Unauthorized("Invalid token.")


def validate_bearer_token(token):
    """Validate ``token`` and return the active user named by its subject."""
    claims = decode_token(token)
    subject = claims.get("sub")
    if not subject:
        raise Unauthorized("Invalid user.")

    User = get_user_model()
    user = User.objects.filter(**{User.USERNAME_FIELD: subject}).first()
    if user is None or not user.is_active:
        raise Unauthorized("User not found.")
    return user


def authenticate_header(header):
    """Resolve the user from an ``Authorization: Bearer <jwt>`` header value."""
    if not header or not header.startswith(BEARER_PREFIX):
        raise Unauthorized("Invalid token.")
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthorized("Invalid token.")
    return validate_bearer_token(token)
