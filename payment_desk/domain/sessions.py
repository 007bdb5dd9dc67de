"""Session token service - signed, time-limited tokens carrying operator identity"""

from datetime import datetime, timedelta
from typing import Any, Dict

import jwt

from payment_desk.config import settings
from payment_desk.domain.exceptions import ConfigurationError, InvalidTokenError
from payment_desk.domain.models import Identity, Role
from payment_desk.utils.date_utils import utcnow


def _signing_key() -> str:
    """Read the secret at call time so a missing value fails the request, not the import"""
    if not settings.jwt_secret:
        raise ConfigurationError("JWT_SECRET is not set")
    return settings.jwt_secret


def issue_token(identity: Identity, issued_at: datetime | None = None) -> str:
    """
    Sign a session token for an operator.

    The token carries email, role, iat and exp, where exp is exactly
    `session_ttl_hours` after iat. It is signed, not encrypted.

    Raises:
        ConfigurationError: No signing secret configured
    """
    key = _signing_key()
    issued_at = issued_at or utcnow()
    payload: Dict[str, Any] = {
        "email": identity.email,
        "role": identity.role.value,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.session_ttl_hours),
    }
    return jwt.encode(payload, key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Identity:
    """
    Verify signature and expiry and return the identity inside.

    Raises:
        InvalidTokenError: Bad signature, malformed token, unknown role or expired
        ConfigurationError: No signing secret configured
    """
    key = _signing_key()
    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat", "email", "role"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Session token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Session token rejected: {e.__class__.__name__}") from e

    email = payload.get("email")
    if not isinstance(email, str) or not email:
        raise InvalidTokenError("Session token has no email")
    try:
        role = Role(payload.get("role"))
    except ValueError as e:
        raise InvalidTokenError("Session token has an unknown role") from e

    return Identity(email=email, role=role)
