"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Role(str, Enum):
    """Operator role carried in the session"""

    ADMIN = "admin"
    LOADER = "loader"


class PaymentStatus(str, Enum):
    """Lifecycle states of an outbound payment"""

    PENDING = "pending"
    APPROVED = "approved"
    LOADED = "loaded"
    AUTHORISED = "authorised"
    REJECTED = "rejected"


class PaymentAction(str, Enum):
    """Operator actions that move a payment between states"""

    APPROVE = "approve"
    REJECT = "reject"
    LOAD = "load"
    AUTHORISE = "authorise"


class BeneficiaryType(str, Enum):
    STANDARD = "standard"  # bank-to-bank transfer to a private party
    PRELOADED = "preloaded"  # institution already registered on ABSA


@dataclass(frozen=True)
class Identity:
    """Verified operator identity attached to a request"""

    email: str
    role: Role


@dataclass(frozen=True)
class OperatorCredential:
    """Static operator identity resolved from configuration"""

    email: str
    password_hash: str
    role: Role


@dataclass
class Payment:
    """Outbound payment instruction from an own bank account to a beneficiary"""

    id: str
    payment_id: str  # human-readable reference, e.g. PAY-001
    status: PaymentStatus
    amount_cents: int
    from_bank_account_id: str
    to_beneficiary_id: str
    created_at: datetime
    updated_at: datetime
    is_new_beneficiary: bool = False
    beneficiary_reference: Optional[str] = None
    payer_reference: Optional[str] = None
    beneficiary_pop_email: Optional[str] = None
    payer_pop_email: Optional[str] = None
    notes: Optional[str] = None
    linked_email_id: Optional[str] = None
    date_approved: Optional[datetime] = None


@dataclass
class Beneficiary:
    """Payment recipient, either a standard bank account holder or a preloaded institution"""

    id: str
    name: str
    type: BeneficiaryType
    loaded_on_absa: bool = False
    beneficiary_number: Optional[int] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    branch_code: Optional[str] = None
    institution_reference: Optional[str] = None
    default_beneficiary_reference: Optional[str] = None
    default_payer_reference: Optional[str] = None
    default_beneficiary_pop_email: Optional[str] = None
    default_payer_pop_email: Optional[str] = None


@dataclass
class BeneficiaryInput:
    """Beneficiary fields supplied by an operator, before an id is assigned"""

    name: str
    type: BeneficiaryType
    loaded_on_absa: bool = False
    beneficiary_number: Optional[int] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    branch_code: Optional[str] = None
    institution_reference: Optional[str] = None
    default_beneficiary_reference: Optional[str] = None
    default_payer_reference: Optional[str] = None
    default_beneficiary_pop_email: Optional[str] = None
    default_payer_pop_email: Optional[str] = None


@dataclass(frozen=True)
class BankAccount:
    """One of the organisation's own source accounts"""

    id: str
    name: str
    account_number: str
    branch_code: str


@dataclass(frozen=True)
class PaymentEmail:
    """Inbound payment-request email produced by the ingestion pipeline"""

    id: str
    subject: str
    sender_email: str
    body: str
    received_at: datetime
    processed: bool
    attachment_paths: List[str] = field(default_factory=list)
