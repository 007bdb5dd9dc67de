"""Payment lifecycle engine - status transitions and the roles allowed to trigger them"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Tuple

from payment_desk.domain.exceptions import NotFoundError, TransitionDeniedError
from payment_desk.domain.models import Payment, PaymentAction, PaymentStatus, Role
from payment_desk.domain.store import PaymentStore
from payment_desk.utils.date_utils import next_timestamp, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """One row of the transition table"""

    source: PaymentStatus
    action: PaymentAction
    target: PaymentStatus
    role: Role
    stamps_approval: bool = False


# approved -> rejected is deliberately absent
TRANSITIONS: Dict[Tuple[PaymentStatus, PaymentAction], Transition] = {
    (t.source, t.action): t
    for t in (
        Transition(PaymentStatus.PENDING, PaymentAction.APPROVE, PaymentStatus.APPROVED, Role.ADMIN, stamps_approval=True),
        Transition(PaymentStatus.PENDING, PaymentAction.REJECT, PaymentStatus.REJECTED, Role.ADMIN),
        Transition(PaymentStatus.APPROVED, PaymentAction.LOAD, PaymentStatus.LOADED, Role.LOADER),
        Transition(PaymentStatus.LOADED, PaymentAction.REJECT, PaymentStatus.REJECTED, Role.ADMIN),
        Transition(PaymentStatus.LOADED, PaymentAction.AUTHORISE, PaymentStatus.AUTHORISED, Role.ADMIN),
    )
}

TERMINAL_STATUSES = frozenset({PaymentStatus.AUTHORISED, PaymentStatus.REJECTED})


def resolve_transition(status: PaymentStatus, action: PaymentAction, role: Role) -> Transition:
    """
    Look up the transition for (status, action) and check the caller's role.

    Raises:
        TransitionDeniedError: No such transition, or the role may not trigger it
    """
    transition = TRANSITIONS.get((status, action))
    if transition is None:
        raise TransitionDeniedError(status.value, action.value, role.value, TransitionDeniedError.STATE)
    if transition.role != role:
        raise TransitionDeniedError(status.value, action.value, role.value, TransitionDeniedError.ROLE)
    return transition


def allowed_actions(status: PaymentStatus, role: Role) -> List[PaymentAction]:
    """Actions `role` may take on a payment currently in `status`"""
    return [
        t.action
        for (source, _), t in TRANSITIONS.items()
        if source == status and t.role == role
    ]


class PaymentLifecycle:
    """
    Applies status transitions to stored payments.

    Holds no state of its own: every call re-reads the payment and writes
    through a compare-and-set on its status, so two concurrent actions on the
    same payment cannot both succeed.
    """

    def __init__(self, store: PaymentStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    def apply(self, payment_id: str, action: PaymentAction, role: Role) -> Payment:
        """
        Run `action` on a payment on behalf of `role`.

        Raises:
            NotFoundError: Payment does not exist
            TransitionDeniedError: Illegal from the current status or for this role
        """
        payment = self.store.get(payment_id)
        if payment is None:
            raise NotFoundError("Payment", payment_id)

        transition = resolve_transition(payment.status, action, role)

        now = self.clock()
        updated_at = next_timestamp(payment.updated_at, now)
        date_approved = None
        if transition.stamps_approval and payment.date_approved is None:
            date_approved = updated_at

        updated = self.store.compare_and_set_status(
            payment_id,
            expected=transition.source,
            new=transition.target,
            updated_at=updated_at,
            date_approved=date_approved,
        )
        if updated is None:
            # Lost a race: report against whatever is stored now
            current = self.store.get(payment_id)
            if current is None:
                raise NotFoundError("Payment", payment_id)
            logger.warning(
                "Concurrent change on payment %s: expected %s, found %s",
                payment_id,
                transition.source.value,
                current.status.value,
            )
            raise TransitionDeniedError(
                current.status.value, action.value, role.value, TransitionDeniedError.STATE
            )

        return updated

    def approve(self, payment_id: str, role: Role) -> Payment:
        return self.apply(payment_id, PaymentAction.APPROVE, role)

    def reject(self, payment_id: str, role: Role) -> Payment:
        return self.apply(payment_id, PaymentAction.REJECT, role)

    def mark_loaded(self, payment_id: str, role: Role) -> Payment:
        return self.apply(payment_id, PaymentAction.LOAD, role)

    def authorise(self, payment_id: str, role: Role) -> Payment:
        return self.apply(payment_id, PaymentAction.AUTHORISE, role)
