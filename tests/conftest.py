"""Pytest fixtures for testing"""

import pytest
import bcrypt
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from payment_desk.api.main import create_app
from payment_desk.config import settings
from payment_desk.domain.models import Beneficiary, Payment, PaymentStatus
from payment_desk.domain.store import BeneficiaryStore, PaymentStore
from payment_desk.infrastructure.database.models import Base
from payment_desk.infrastructure.database.seed import seed_demo_data
from payment_desk.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_SECRET = "test-signing-secret-that-is-long-enough-for-hs256"
ADMIN_EMAIL = "ricky@example.com"
ADMIN_PASSWORD = "admin-correct-horse"
LOADER_EMAIL = "lara@example.com"
LOADER_PASSWORD = "loader-battery-staple"

# Low cost factor keeps the suite fast
ADMIN_HASH = bcrypt.hashpw(ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()
LOADER_HASH = bcrypt.hashpw(LOADER_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()


@pytest.fixture(autouse=True)
def auth_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Signing secret and both operator identities for every test"""
    monkeypatch.setattr(settings, "jwt_secret", TEST_SECRET)
    monkeypatch.setattr(settings, "environment", "test")
    monkeypatch.setattr(settings, "admin_email", ADMIN_EMAIL)
    monkeypatch.setattr(settings, "admin_password_hash", ADMIN_HASH)
    monkeypatch.setattr(settings, "loader_email", LOADER_EMAIL)
    monkeypatch.setattr(settings, "loader_password_hash", LOADER_HASH)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db: Session) -> Session:
    """Test database holding the demo bank accounts, beneficiaries, payments and emails"""
    seed_demo_data(db)
    return db


@pytest.fixture
def make_client(db: Session) -> Callable[[], TestClient]:
    """Factory for independent clients (separate cookie jars) sharing one test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return lambda: TestClient(app)


@pytest.fixture
def client(make_client: Callable[[], TestClient]) -> TestClient:
    """Create FastAPI test client with test database"""
    return make_client()


def login(client: TestClient, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})


@pytest.fixture
def admin_client(seeded_db: Session, make_client: Callable[[], TestClient]) -> TestClient:
    client = make_client()
    assert login(client, ADMIN_EMAIL, ADMIN_PASSWORD).status_code == 200
    return client


@pytest.fixture
def loader_client(seeded_db: Session, make_client: Callable[[], TestClient]) -> TestClient:
    client = make_client()
    assert login(client, LOADER_EMAIL, LOADER_PASSWORD).status_code == 200
    return client


class InMemoryPaymentStore(PaymentStore):
    """Dict-backed payment store handing out copies"""

    def __init__(self, payments: List[Payment] = ()):
        self.rows: Dict[str, Payment] = {p.id: replace(p) for p in payments}

    def get(self, payment_id: str) -> Optional[Payment]:
        row = self.rows.get(payment_id)
        return replace(row) if row else None

    def list(self, status: Optional[PaymentStatus] = None) -> List[Payment]:
        return [replace(p) for p in self.rows.values() if status is None or p.status == status]

    def append(self, payment: Payment) -> Payment:
        self.rows[payment.id] = replace(payment)
        return replace(payment)

    def compare_and_set_status(self, payment_id, expected, new, updated_at, date_approved=None):
        row = self.rows.get(payment_id)
        if row is None or row.status != expected:
            return None
        changes = {"status": new, "updated_at": updated_at}
        if date_approved is not None:
            changes["date_approved"] = date_approved
        self.rows[payment_id] = replace(row, **changes)
        return replace(self.rows[payment_id])


class InMemoryBeneficiaryStore(BeneficiaryStore):
    def __init__(self):
        self.rows: Dict[str, Beneficiary] = {}

    def get(self, beneficiary_id: str) -> Optional[Beneficiary]:
        row = self.rows.get(beneficiary_id)
        return replace(row) if row else None

    def list(self) -> List[Beneficiary]:
        return [replace(b) for b in self.rows.values()]

    def append(self, beneficiary: Beneficiary) -> Beneficiary:
        self.rows[beneficiary.id] = replace(beneficiary)
        return replace(beneficiary)


CREATED_AT = datetime(2026, 2, 10, 8, 30, tzinfo=timezone.utc)


def make_payment(
    status: PaymentStatus = PaymentStatus.PENDING,
    payment_id: str = "pay-1",
    updated_at: Optional[datetime] = None,
    date_approved: Optional[datetime] = None,
) -> Payment:
    """Payment in the given status with plausible field values"""
    if date_approved is None and status in (PaymentStatus.APPROVED, PaymentStatus.LOADED, PaymentStatus.AUTHORISED):
        date_approved = CREATED_AT + timedelta(hours=1)
    return Payment(
        id=payment_id,
        payment_id=f"PAY-{payment_id.split('-')[-1].zfill(3)}",
        status=status,
        amount_cents=1_250_000,
        from_bank_account_id="ba-1",
        to_beneficiary_id="ben-3",
        created_at=CREATED_AT,
        updated_at=updated_at or CREATED_AT + timedelta(hours=2),
        date_approved=date_approved,
    )
