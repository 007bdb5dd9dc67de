"""Data access layer implementing the record store contract on SQLAlchemy"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from payment_desk.infrastructure.database.models import (
    BankAccountRecord,
    BeneficiaryRecord,
    PaymentEmailRecord,
    PaymentRecord,
)
from payment_desk.domain.models import (
    BankAccount,
    Beneficiary,
    BeneficiaryType,
    Payment,
    PaymentEmail,
    PaymentStatus,
)
from payment_desk.domain.store import BankAccountStore, BeneficiaryStore, EmailStore, PaymentStore
from payment_desk.utils.date_utils import ensure_utc


def _to_payment(row: PaymentRecord) -> Payment:
    return Payment(
        id=row.id,
        payment_id=row.payment_id,
        status=PaymentStatus(row.status),
        amount_cents=row.amount_cents,
        from_bank_account_id=row.from_bank_account_id,
        to_beneficiary_id=row.to_beneficiary_id,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
        is_new_beneficiary=row.is_new_beneficiary,
        beneficiary_reference=row.beneficiary_reference,
        payer_reference=row.payer_reference,
        beneficiary_pop_email=row.beneficiary_pop_email,
        payer_pop_email=row.payer_pop_email,
        notes=row.notes,
        linked_email_id=row.linked_email_id,
        date_approved=ensure_utc(row.date_approved),
    )


def _to_beneficiary(row: BeneficiaryRecord) -> Beneficiary:
    return Beneficiary(
        id=row.id,
        name=row.name,
        type=BeneficiaryType(row.type),
        loaded_on_absa=row.loaded_on_absa,
        beneficiary_number=row.beneficiary_number,
        bank_name=row.bank_name,
        bank_account_number=row.bank_account_number,
        branch_code=row.branch_code,
        institution_reference=row.institution_reference,
        default_beneficiary_reference=row.default_beneficiary_reference,
        default_payer_reference=row.default_payer_reference,
        default_beneficiary_pop_email=row.default_beneficiary_pop_email,
        default_payer_pop_email=row.default_payer_pop_email,
    )


class PaymentRepository(PaymentStore):
    """Repository for payments"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, payment_id: str) -> Optional[Payment]:
        row = self.db.get(PaymentRecord, payment_id, populate_existing=True)
        return _to_payment(row) if row else None

    def list(self, status: Optional[PaymentStatus] = None) -> List[Payment]:
        """Payments newest first, optionally narrowed to one status"""
        query = self.db.query(PaymentRecord)
        if status is not None:
            query = query.filter(PaymentRecord.status == status.value)
        return [_to_payment(row) for row in query.order_by(PaymentRecord.created_at.desc()).all()]

    def append(self, payment: Payment) -> Payment:
        row = PaymentRecord(
            id=payment.id,
            payment_id=payment.payment_id,
            status=payment.status.value,
            amount_cents=payment.amount_cents,
            from_bank_account_id=payment.from_bank_account_id,
            to_beneficiary_id=payment.to_beneficiary_id,
            beneficiary_reference=payment.beneficiary_reference,
            payer_reference=payment.payer_reference,
            beneficiary_pop_email=payment.beneficiary_pop_email,
            payer_pop_email=payment.payer_pop_email,
            is_new_beneficiary=payment.is_new_beneficiary,
            notes=payment.notes,
            linked_email_id=payment.linked_email_id,
            date_approved=payment.date_approved,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )
        self.db.add(row)
        self.db.flush()  # Surface constraint errors without committing
        return _to_payment(row)

    def compare_and_set_status(
        self,
        payment_id: str,
        expected: PaymentStatus,
        new: PaymentStatus,
        updated_at: datetime,
        date_approved: Optional[datetime] = None,
    ) -> Optional[Payment]:
        """Single conditional UPDATE; zero rows means someone else moved the payment first"""
        values = {"status": new.value, "updated_at": updated_at}
        if date_approved is not None:
            values["date_approved"] = date_approved

        stmt = (
            update(PaymentRecord)
            .where(PaymentRecord.id == payment_id, PaymentRecord.status == expected.value)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            return None
        return self.get(payment_id)


class BeneficiaryRepository(BeneficiaryStore):
    """Repository for beneficiaries"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, beneficiary_id: str) -> Optional[Beneficiary]:
        row = self.db.get(BeneficiaryRecord, beneficiary_id)
        return _to_beneficiary(row) if row else None

    def list(self) -> List[Beneficiary]:
        rows = self.db.query(BeneficiaryRecord).order_by(BeneficiaryRecord.name).all()
        return [_to_beneficiary(row) for row in rows]

    def append(self, beneficiary: Beneficiary) -> Beneficiary:
        row = BeneficiaryRecord(
            id=beneficiary.id,
            name=beneficiary.name,
            type=beneficiary.type.value,
            loaded_on_absa=beneficiary.loaded_on_absa,
            beneficiary_number=beneficiary.beneficiary_number,
            bank_name=beneficiary.bank_name,
            bank_account_number=beneficiary.bank_account_number,
            branch_code=beneficiary.branch_code,
            institution_reference=beneficiary.institution_reference,
            default_beneficiary_reference=beneficiary.default_beneficiary_reference,
            default_payer_reference=beneficiary.default_payer_reference,
            default_beneficiary_pop_email=beneficiary.default_beneficiary_pop_email,
            default_payer_pop_email=beneficiary.default_payer_pop_email,
        )
        self.db.add(row)
        self.db.flush()
        return _to_beneficiary(row)


class BankAccountRepository(BankAccountStore):
    """Repository for the organisation's source accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, account_id: str) -> Optional[BankAccount]:
        row = self.db.get(BankAccountRecord, account_id)
        if not row:
            return None
        return BankAccount(row.id, row.name, row.account_number, row.branch_code)

    def list(self) -> List[BankAccount]:
        rows = self.db.query(BankAccountRecord).order_by(BankAccountRecord.id).all()
        return [BankAccount(r.id, r.name, r.account_number, r.branch_code) for r in rows]


class EmailRepository(EmailStore):
    """Repository for ingested payment-request emails"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_email(row: PaymentEmailRecord) -> PaymentEmail:
        return PaymentEmail(
            id=row.id,
            subject=row.subject,
            sender_email=row.sender_email,
            body=row.body,
            received_at=ensure_utc(row.received_at),
            processed=row.processed,
            attachment_paths=list(row.attachment_paths or []),
        )

    def get(self, email_id: str) -> Optional[PaymentEmail]:
        row = self.db.get(PaymentEmailRecord, email_id)
        return self._to_email(row) if row else None

    def list(self, processed: Optional[bool] = None) -> List[PaymentEmail]:
        query = self.db.query(PaymentEmailRecord)
        if processed is not None:
            query = query.filter(PaymentEmailRecord.processed == processed)
        return [self._to_email(row) for row in query.order_by(PaymentEmailRecord.received_at.desc()).all()]
