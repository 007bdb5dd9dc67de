"""Demo records for local development, loaded only into an empty database"""

import logging
from datetime import datetime
from sqlalchemy.orm import Session
from payment_desk.infrastructure.database.models import (
    BankAccountRecord,
    BeneficiaryRecord,
    PaymentEmailRecord,
    PaymentRecord,
)

logger = logging.getLogger(__name__)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


BANK_ACCOUNTS = [
    dict(id="ba-1", name="Klopper Family Trust - ABSA", account_number="4076543210", branch_code="632005"),
    dict(id="ba-2", name="Klopper Properties - ABSA", account_number="4071234567", branch_code="632005"),
]

BENEFICIARIES = [
    dict(id="ben-1", name="Cape Town Municipality", type="preloaded", loaded_on_absa=True,
         beneficiary_number=12, institution_reference="CPT-ACC-884421", default_payer_reference="RATES"),
    dict(id="ben-2", name="SARS-VAT", type="preloaded", loaded_on_absa=True,
         beneficiary_number=8, institution_reference="PRN-20261234567", default_beneficiary_reference="VAT201"),
    dict(id="ben-3", name="BuildIt Suppliers (Pty) Ltd", type="standard", loaded_on_absa=True,
         beneficiary_number=45, bank_name="FNB", bank_account_number="62987654321", branch_code="250655",
         default_beneficiary_reference="INV", default_payer_reference="KLOPPER",
         default_beneficiary_pop_email="accounts@buildit.co.za"),
    dict(id="ben-4", name="Apex Legal Inc", type="standard", loaded_on_absa=False,
         bank_name="Nedbank", bank_account_number="1234567890", branch_code="198765",
         default_payer_reference="RETAINER"),
    dict(id="ben-5", name="SA Water Board", type="preloaded", loaded_on_absa=True,
         beneficiary_number=3, institution_reference="SAWB-009912"),
]

EMAILS = [
    dict(id="email-1", subject="Invoice INV-2026-0089 from BuildIt Suppliers", sender_email="ricky@klopper.co.za",
         body="Please find attached invoice INV-2026-0089 for R12,500.00 for materials supplied in January 2026.",
         received_at=_ts("2026-02-10T07:45:00Z"), processed=True,
         attachment_paths=["payments/2026-feb/INV-2026-0089.pdf"]),
    dict(id="email-2", subject="SARS VAT Payment Due - Feb 2026", sender_email="ricky@klopper.co.za",
         body="VAT201 payment required. PRN: PRN-20261234567. Amount: R95,000.00. Due: 28 Feb 2026.",
         received_at=_ts("2026-02-07T10:30:00Z"), processed=True,
         attachment_paths=["payments/2026-feb/SARS-VAT-201-FEB2026.pdf"]),
    dict(id="email-3", subject="Apex Legal Inc - February Retainer", sender_email="ricky@klopper.co.za",
         body="February retainer invoice from Apex Legal Inc. Amount: R33,400.00. Please load as new beneficiary.",
         received_at=_ts("2026-02-14T07:15:00Z"), processed=True,
         attachment_paths=["payments/2026-feb/Apex-Legal-Retainer-Feb2026.pdf"]),
    dict(id="email-4", subject="Pending: Insurance Renewal Premium", sender_email="ricky@klopper.co.za",
         body="Annual insurance renewal. See attached invoice. Urgent - due end of month.",
         received_at=_ts("2026-02-17T09:00:00Z"), processed=False,
         attachment_paths=["payments/2026-feb/Insurance-Renewal-2026.pdf"]),
]

PAYMENTS = [
    dict(id="pay-1", payment_id="PAY-001", status="pending", amount_cents=1_250_000,
         from_bank_account_id="ba-1", to_beneficiary_id="ben-3",
         beneficiary_reference="INV-2026-0089", payer_reference="KLOPPER-FEB",
         beneficiary_pop_email="accounts@buildit.co.za", linked_email_id="email-1",
         created_at=_ts("2026-02-10T08:30:00Z"), updated_at=_ts("2026-02-10T08:30:00Z")),
    dict(id="pay-2", payment_id="PAY-002", status="approved", amount_cents=4_875_000,
         from_bank_account_id="ba-1", to_beneficiary_id="ben-1",
         beneficiary_reference="RATES-Q1-2026", payer_reference="RATES",
         date_approved=_ts("2026-02-12T09:00:00Z"),
         created_at=_ts("2026-02-11T14:00:00Z"), updated_at=_ts("2026-02-12T09:00:00Z")),
    dict(id="pay-3", payment_id="PAY-003", status="loaded", amount_cents=9_500_000,
         from_bank_account_id="ba-1", to_beneficiary_id="ben-2",
         beneficiary_reference="VAT201", payer_reference="PRN-20261234567", linked_email_id="email-2",
         date_approved=_ts("2026-02-08T10:00:00Z"),
         created_at=_ts("2026-02-07T11:00:00Z"), updated_at=_ts("2026-02-13T16:00:00Z")),
    dict(id="pay-4", payment_id="PAY-004", status="authorised", amount_cents=725_050,
         from_bank_account_id="ba-2", to_beneficiary_id="ben-5",
         date_approved=_ts("2026-02-01T09:30:00Z"),
         created_at=_ts("2026-01-31T14:00:00Z"), updated_at=_ts("2026-02-04T12:00:00Z")),
    dict(id="pay-5", payment_id="PAY-005", status="rejected", amount_cents=1_500_000,
         from_bank_account_id="ba-2", to_beneficiary_id="ben-4",
         beneficiary_reference="RETAINER-JAN", payer_reference="KLOPPER",
         notes="Beneficiary not yet loaded on ABSA - rejected, needs to be loaded first.",
         created_at=_ts("2026-02-05T10:00:00Z"), updated_at=_ts("2026-02-06T09:00:00Z")),
    dict(id="pay-6", payment_id="PAY-006", status="pending", amount_cents=3_340_000,
         from_bank_account_id="ba-1", to_beneficiary_id="ben-4",
         beneficiary_reference="RETAINER-FEB", payer_reference="KLOPPER", is_new_beneficiary=True,
         notes="New beneficiary - Apex Legal Inc must be loaded on ABSA before payment can proceed.",
         linked_email_id="email-3",
         created_at=_ts("2026-02-14T08:00:00Z"), updated_at=_ts("2026-02-14T08:00:00Z")),
    dict(id="pay-7", payment_id="PAY-007", status="approved", amount_cents=550_000,
         from_bank_account_id="ba-2", to_beneficiary_id="ben-3",
         beneficiary_reference="INV-2026-0092", payer_reference="PROPS-FEB",
         date_approved=_ts("2026-02-15T11:00:00Z"),
         created_at=_ts("2026-02-14T15:00:00Z"), updated_at=_ts("2026-02-15T11:00:00Z")),
    dict(id="pay-8", payment_id="PAY-008", status="authorised", amount_cents=2_210_000,
         from_bank_account_id="ba-1", to_beneficiary_id="ben-1",
         beneficiary_reference="LEVIES-Q4-2025",
         date_approved=_ts("2025-12-15T09:00:00Z"),
         created_at=_ts("2025-12-14T10:00:00Z"), updated_at=_ts("2025-12-16T14:00:00Z")),
    dict(id="pay-9", payment_id="PAY-009", status="loaded", amount_cents=1_120_000,
         from_bank_account_id="ba-1", to_beneficiary_id="ben-5",
         date_approved=_ts("2026-02-16T08:00:00Z"),
         created_at=_ts("2026-02-15T16:00:00Z"), updated_at=_ts("2026-02-17T09:00:00Z")),
]


def seed_demo_data(db: Session) -> bool:
    """Insert the demo records; returns False without touching anything if payments already exist"""
    if db.query(PaymentRecord).first() is not None:
        logger.info("Demo seed skipped: database already has payments")
        return False

    db.add_all(BankAccountRecord(**row) for row in BANK_ACCOUNTS)
    db.add_all(BeneficiaryRecord(**row) for row in BENEFICIARIES)
    db.add_all(PaymentEmailRecord(**row) for row in EMAILS)
    db.flush()
    db.add_all(PaymentRecord(**row) for row in PAYMENTS)
    db.commit()

    logger.info(
        "Demo seed loaded",
        extra={"payments": len(PAYMENTS), "beneficiaries": len(BENEFICIARIES), "emails": len(EMAILS)},
    )
    return True
