"""Unit tests for the payment status state machine"""

import itertools
import pytest
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from conftest import CREATED_AT, InMemoryPaymentStore, make_payment
from payment_desk.domain.exceptions import NotFoundError, TransitionDeniedError
from payment_desk.domain.lifecycle import (
    TERMINAL_STATUSES,
    TRANSITIONS,
    PaymentLifecycle,
    allowed_actions,
    resolve_transition,
)
from payment_desk.domain.models import PaymentAction, PaymentStatus, Role


NOW = datetime(2026, 2, 18, 9, 0, tzinfo=timezone.utc)


def engine_for(*payments) -> tuple[PaymentLifecycle, InMemoryPaymentStore]:
    store = InMemoryPaymentStore(list(payments))
    return PaymentLifecycle(store, clock=lambda: NOW), store


def test_transition_table_matches_workflow():
    """Five legal moves, approved -> rejected intentionally absent"""
    table = {(s.value, a.value): (t.target.value, t.role.value) for (s, a), t in TRANSITIONS.items()}
    assert table == {
        ("pending", "approve"): ("approved", "admin"),
        ("pending", "reject"): ("rejected", "admin"),
        ("approved", "load"): ("loaded", "loader"),
        ("loaded", "reject"): ("rejected", "admin"),
        ("loaded", "authorise"): ("authorised", "admin"),
    }
    assert (PaymentStatus.APPROVED, PaymentAction.REJECT) not in TRANSITIONS


def test_admin_approves_pending_payment():
    engine, store = engine_for(make_payment(PaymentStatus.PENDING))

    payment = engine.approve("pay-1", Role.ADMIN)

    assert payment.status == PaymentStatus.APPROVED
    assert payment.date_approved == NOW
    assert payment.updated_at == NOW
    assert store.get("pay-1").status == PaymentStatus.APPROVED


def test_loader_cannot_approve_and_payment_is_untouched():
    before = make_payment(PaymentStatus.PENDING)
    engine, store = engine_for(before)

    with pytest.raises(TransitionDeniedError) as exc_info:
        engine.approve("pay-1", Role.LOADER)

    assert exc_info.value.reason == TransitionDeniedError.ROLE
    assert exc_info.value.current_status == "pending"
    assert exc_info.value.action == "approve"
    after = store.get("pay-1")
    assert after.status == PaymentStatus.PENDING
    assert after.updated_at == before.updated_at
    assert after.date_approved is None


def test_full_happy_path_pending_to_authorised():
    engine, store = engine_for(make_payment(PaymentStatus.PENDING))

    engine.approve("pay-1", Role.ADMIN)
    approved_at = store.get("pay-1").date_approved
    engine.mark_loaded("pay-1", Role.LOADER)
    payment = engine.authorise("pay-1", Role.ADMIN)

    assert payment.status == PaymentStatus.AUTHORISED
    assert payment.date_approved == approved_at


def test_loaded_payment_authorise_requires_admin_then_is_terminal():
    engine, store = engine_for(make_payment(PaymentStatus.LOADED))

    with pytest.raises(TransitionDeniedError):
        engine.authorise("pay-1", Role.LOADER)
    assert store.get("pay-1").status == PaymentStatus.LOADED

    assert engine.authorise("pay-1", Role.ADMIN).status == PaymentStatus.AUTHORISED

    for action in (engine.authorise, engine.reject):
        with pytest.raises(TransitionDeniedError) as exc_info:
            action("pay-1", Role.ADMIN)
        assert exc_info.value.reason == TransitionDeniedError.STATE


def test_loaded_payment_can_be_rejected_by_admin():
    engine, _ = engine_for(make_payment(PaymentStatus.LOADED))
    assert engine.reject("pay-1", Role.ADMIN).status == PaymentStatus.REJECTED


def test_approved_payment_cannot_be_rejected():
    engine, store = engine_for(make_payment(PaymentStatus.APPROVED))

    with pytest.raises(TransitionDeniedError) as exc_info:
        engine.reject("pay-1", Role.ADMIN)

    assert exc_info.value.reason == TransitionDeniedError.STATE
    assert store.get("pay-1").status == PaymentStatus.APPROVED


@pytest.mark.parametrize(
    "status,action,role",
    [
        combo
        for combo in itertools.product(PaymentStatus, PaymentAction, Role)
        if TRANSITIONS.get(combo[:2]) is None or TRANSITIONS[combo[:2]].role != combo[2]
    ],
)
def test_every_unlisted_transition_is_denied_without_change(status, action, role):
    before = make_payment(status)
    engine, store = engine_for(before)

    with pytest.raises(TransitionDeniedError):
        engine.apply("pay-1", action, role)

    after = store.get("pay-1")
    assert after.status == before.status
    assert after.updated_at == before.updated_at
    assert after.date_approved == before.date_approved


def test_terminal_statuses_have_no_outgoing_transitions():
    for status, role in itertools.product(TERMINAL_STATUSES, Role):
        assert allowed_actions(status, role) == []


def test_allowed_actions_per_role():
    assert allowed_actions(PaymentStatus.PENDING, Role.ADMIN) == [PaymentAction.APPROVE, PaymentAction.REJECT]
    assert allowed_actions(PaymentStatus.PENDING, Role.LOADER) == []
    assert allowed_actions(PaymentStatus.APPROVED, Role.LOADER) == [PaymentAction.LOAD]
    assert allowed_actions(PaymentStatus.APPROVED, Role.ADMIN) == []
    assert allowed_actions(PaymentStatus.LOADED, Role.ADMIN) == [PaymentAction.REJECT, PaymentAction.AUTHORISE]


def test_resolve_transition_reports_state_before_role():
    with pytest.raises(TransitionDeniedError) as exc_info:
        resolve_transition(PaymentStatus.REJECTED, PaymentAction.APPROVE, Role.LOADER)
    assert exc_info.value.reason == TransitionDeniedError.STATE
    assert "rejected" in exc_info.value.message


def test_unknown_payment_raises_not_found():
    engine, _ = engine_for()
    with pytest.raises(NotFoundError):
        engine.approve("pay-404", Role.ADMIN)


def test_updated_at_strictly_increases_when_clock_lags():
    """A clock behind the stored timestamp still produces a later updated_at"""
    stored = CREATED_AT + timedelta(days=30)
    store = InMemoryPaymentStore([make_payment(PaymentStatus.PENDING, updated_at=stored)])
    engine = PaymentLifecycle(store, clock=lambda: stored - timedelta(minutes=5))

    payment = engine.approve("pay-1", Role.ADMIN)

    assert payment.updated_at > stored
    assert payment.date_approved == payment.updated_at


def test_created_at_never_changes():
    engine, _ = engine_for(make_payment(PaymentStatus.PENDING))
    assert engine.reject("pay-1", Role.ADMIN).created_at == CREATED_AT


class RacingStore(InMemoryPaymentStore):
    """Lets another writer reject the payment between our read and our write"""

    def compare_and_set_status(self, payment_id, expected, new, updated_at, date_approved=None):
        rival = self.rows[payment_id]
        self.rows[payment_id] = replace(rival, status=PaymentStatus.REJECTED)
        return super().compare_and_set_status(payment_id, expected, new, updated_at, date_approved)


def test_concurrent_change_wins_and_loser_is_denied():
    store = RacingStore([make_payment(PaymentStatus.PENDING)])
    engine = PaymentLifecycle(store, clock=lambda: NOW)

    with pytest.raises(TransitionDeniedError) as exc_info:
        engine.approve("pay-1", Role.ADMIN)

    assert exc_info.value.current_status == "rejected"
    stored = store.get("pay-1")
    assert stored.status == PaymentStatus.REJECTED
    assert stored.date_approved is None


def test_returned_payment_is_a_copy():
    engine, store = engine_for(make_payment(PaymentStatus.PENDING))
    payment = engine.approve("pay-1", Role.ADMIN)

    payment.status = PaymentStatus.PENDING

    assert store.get("pay-1").status == PaymentStatus.APPROVED
