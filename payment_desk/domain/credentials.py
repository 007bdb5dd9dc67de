"""Operator credential lookup and password verification"""

import logging
from functools import lru_cache
from typing import List, Optional

import bcrypt

from payment_desk.config import settings
from payment_desk.domain.exceptions import AuthenticationError, ConfigurationError
from payment_desk.domain.models import Identity, OperatorCredential, Role

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; longer inputs are refused outright
MAX_PASSWORD_BYTES = 72

GENERIC_FAILURE = "Invalid email or password"


def configured_operators() -> List[OperatorCredential]:
    """The two static identities, skipping any whose email or hash is not configured"""
    operators = [
        OperatorCredential(settings.admin_email, settings.admin_password_hash, Role.ADMIN),
        OperatorCredential(settings.loader_email, settings.loader_password_hash, Role.LOADER),
    ]
    return [op for op in operators if op.email and op.password_hash]


def find_operator(email: str) -> Optional[OperatorCredential]:
    for operator in configured_operators():
        if operator.email == email:
            return operator
    return None


@lru_cache(maxsize=1)
def _dummy_hash() -> bytes:
    return bcrypt.hashpw(b"unused-placeholder-password", bcrypt.gensalt())


def _check_password(password: bytes, password_hash: bytes) -> bool:
    try:
        return bcrypt.checkpw(password, password_hash)
    except ValueError as e:
        raise ConfigurationError("Stored password hash is not a valid bcrypt hash") from e


def authenticate(email: str, password: str) -> Identity:
    """
    Resolve an operator from email and password.

    An unknown email is still checked against a placeholder hash so both
    failure paths cost the same and return the same message.

    Raises:
        AuthenticationError: Unknown email or wrong password
        ConfigurationError: Configured hash is not a bcrypt hash
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        raise AuthenticationError(GENERIC_FAILURE)

    operator = find_operator(email)
    if operator is None:
        _check_password(password_bytes, _dummy_hash())
        raise AuthenticationError(GENERIC_FAILURE)

    if not _check_password(password_bytes, operator.password_hash.encode("utf-8")):
        raise AuthenticationError(GENERIC_FAILURE)

    return Identity(email=operator.email, role=operator.role)
