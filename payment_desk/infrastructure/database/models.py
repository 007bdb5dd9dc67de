"""SQLAlchemy ORM models for payments and their reference data"""

import uuid
from sqlalchemy import Column, String, BigInteger, Boolean, DateTime, Integer, ForeignKey, Text, JSON, CheckConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class BankAccountRecord(Base):
    """Organisation's own source account"""

    __tablename__ = "bank_account"

    id = Column(String(64), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    account_number = Column(String(32), nullable=False)
    branch_code = Column(String(16), nullable=False)


class BeneficiaryRecord(Base):
    """Payment recipient"""

    __tablename__ = "beneficiary"

    id = Column(String(64), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    type = Column(String(16), nullable=False)  # standard | preloaded
    loaded_on_absa = Column(Boolean, nullable=False, default=False)
    beneficiary_number = Column(Integer, nullable=True)
    bank_name = Column(Text, nullable=True)
    bank_account_number = Column(String(32), nullable=True)
    branch_code = Column(String(16), nullable=True)
    institution_reference = Column(Text, nullable=True)
    default_beneficiary_reference = Column(Text, nullable=True)
    default_payer_reference = Column(Text, nullable=True)
    default_beneficiary_pop_email = Column(Text, nullable=True)
    default_payer_pop_email = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class PaymentEmailRecord(Base):
    """Inbound payment-request email"""

    __tablename__ = "payment_email"

    id = Column(String(64), primary_key=True, default=_new_id)
    subject = Column(Text, nullable=False)
    sender_email = Column(Text, nullable=False)
    body = Column(Text, nullable=False)
    received_at = Column(DateTime(timezone=True), nullable=False)
    processed = Column(Boolean, nullable=False, default=False)
    attachment_paths = Column(JSON, nullable=False, default=list)


class PaymentRecord(Base):
    """Outbound payment moving through the approval workflow"""

    __tablename__ = "payment"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'loaded', 'authorised', 'rejected')",
            name="ck_payment_status",
        ),
        CheckConstraint("amount_cents >= 0", name="ck_payment_amount_non_negative"),
    )

    id = Column(String(64), primary_key=True, default=_new_id)
    payment_id = Column(String(32), nullable=False, unique=True)
    status = Column(String(16), nullable=False, default="pending", index=True)
    amount_cents = Column(BigInteger, nullable=False)
    from_bank_account_id = Column(String(64), ForeignKey("bank_account.id"), nullable=False)
    to_beneficiary_id = Column(String(64), ForeignKey("beneficiary.id"), nullable=False)
    beneficiary_reference = Column(Text, nullable=True)
    payer_reference = Column(Text, nullable=True)
    beneficiary_pop_email = Column(Text, nullable=True)
    payer_pop_email = Column(Text, nullable=True)
    is_new_beneficiary = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    linked_email_id = Column(String(64), ForeignKey("payment_email.id"), nullable=True)
    date_approved = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
