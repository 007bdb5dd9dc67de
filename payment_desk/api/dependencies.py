"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from payment_desk.domain.exceptions import AuthenticationError
from payment_desk.domain.lifecycle import PaymentLifecycle
from payment_desk.domain.models import Identity
from payment_desk.infrastructure.database.repositories import PaymentRepository
from payment_desk.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_identity(request: Request) -> Identity:
    """
    Identity verified by the session gateway.

    Headers are never consulted: a request the gateway did not stamp is
    unauthenticated.
    """
    identity = getattr(request.state, "identity", None)
    if not isinstance(identity, Identity):
        raise AuthenticationError("Authentication required")
    return identity


def get_payment_lifecycle(db: Session = Depends(get_db)) -> PaymentLifecycle:
    """Provide the lifecycle engine bound to this request's session"""
    return PaymentLifecycle(PaymentRepository(db))
