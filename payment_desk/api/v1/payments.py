"""Payment listing, detail and status transitions under /dashboard/payments"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from payment_desk.api.dependencies import get_current_identity, get_payment_lifecycle, get_request_id
from payment_desk.api.v1.schemas import PaymentDetailResponse, PaymentListResponse, PaymentResponse
from payment_desk.domain.exceptions import NotFoundError, TransitionDeniedError
from payment_desk.domain.lifecycle import PaymentLifecycle, allowed_actions
from payment_desk.domain.models import Identity, Payment, PaymentAction, PaymentStatus
from payment_desk.infrastructure.database.repositories import PaymentRepository
from payment_desk.infrastructure.database.session import get_db
from payment_desk.infrastructure.observability.logging import log_transition
from payment_desk.infrastructure.observability.metrics import record_transition

router = APIRouter()


def _detail(payment: Payment, identity: Identity) -> PaymentDetailResponse:
    response = PaymentDetailResponse.model_validate(payment, from_attributes=True)
    response.allowed_actions = allowed_actions(payment.status, identity.role)
    return response


@router.get("/payments", response_model=PaymentListResponse)
def list_payments(
    status: Optional[PaymentStatus] = Query(None, description="Only payments in this status"),
    db: Session = Depends(get_db),
):
    payments = PaymentRepository(db).list(status=status)
    return PaymentListResponse(
        payments=[PaymentResponse.model_validate(p, from_attributes=True) for p in payments]
    )


@router.get("/payments/{payment_id}", response_model=PaymentDetailResponse)
def get_payment(
    payment_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Retrieve one payment.

    Returns:
        Payment fields plus the actions the caller's role may take right now
    """
    payment = PaymentRepository(db).get(payment_id)
    if payment is None:
        raise NotFoundError("Payment", payment_id)
    return _detail(payment, identity)


@router.post("/payments/{payment_id}/{action}", response_model=PaymentDetailResponse)
def transition_payment(
    payment_id: str,
    action: PaymentAction,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    lifecycle: PaymentLifecycle = Depends(get_payment_lifecycle),
    db: Session = Depends(get_db),
):
    """
    Apply approve / reject / load / authorise to a payment.

    The role comes from the verified session only. Denied transitions leave
    the payment untouched and answer 403 (wrong role) or 409 (wrong status).
    """
    request_id = get_request_id(request)

    try:
        payment = lifecycle.apply(payment_id, action, identity.role)
    except TransitionDeniedError as e:
        db.rollback()
        record_transition(action.value, "denied")
        log_transition(request_id, payment_id, action.value, identity.role.value, "denied", from_status=e.current_status)
        raise
    except NotFoundError:
        db.rollback()
        record_transition(action.value, "not_found")
        log_transition(request_id, payment_id, action.value, identity.role.value, "not_found")
        raise

    db.commit()

    record_transition(action.value, "applied")
    log_transition(request_id, payment_id, action.value, identity.role.value, "applied", to_status=payment.status.value)

    return _detail(payment, identity)
