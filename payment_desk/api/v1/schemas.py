"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictStr

from payment_desk.domain.models import BeneficiaryType, PaymentAction, PaymentStatus, Role


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login"""

    email: StrictStr = Field(..., min_length=1)
    password: StrictStr = Field(..., min_length=1)


class SuccessResponse(BaseModel):
    success: bool = True


class SessionResponse(BaseModel):
    """Identity attached to the current session"""

    email: str
    role: Role


class PaymentResponse(BaseModel):
    """Payment record as seen by operators"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    payment_id: str
    status: PaymentStatus
    amount_cents: int
    from_bank_account_id: str
    to_beneficiary_id: str
    beneficiary_reference: Optional[str] = None
    payer_reference: Optional[str] = None
    beneficiary_pop_email: Optional[str] = None
    payer_pop_email: Optional[str] = None
    is_new_beneficiary: bool
    notes: Optional[str] = None
    linked_email_id: Optional[str] = None
    date_approved: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PaymentDetailResponse(PaymentResponse):
    """Single payment plus the actions the caller may take on it now"""

    allowed_actions: List[PaymentAction] = []


class PaymentListResponse(BaseModel):
    payments: List[PaymentResponse]


class BeneficiaryCreate(BaseModel):
    """Request body for POST /dashboard/beneficiaries"""

    name: str = Field(..., min_length=1)
    type: BeneficiaryType
    loaded_on_absa: bool = False
    beneficiary_number: Optional[int] = Field(None, ge=0)
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    branch_code: Optional[str] = None
    institution_reference: Optional[str] = None
    default_beneficiary_reference: Optional[str] = None
    default_payer_reference: Optional[str] = None
    default_beneficiary_pop_email: Optional[str] = None
    default_payer_pop_email: Optional[str] = None


class BeneficiaryResponse(BeneficiaryCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str


class BeneficiaryListResponse(BaseModel):
    beneficiaries: List[BeneficiaryResponse]


class BankAccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    account_number: str
    branch_code: str


class BankAccountListResponse(BaseModel):
    bank_accounts: List[BankAccountResponse]


class EmailResponse(BaseModel):
    """Inbound payment-request email"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    subject: str
    sender_email: str
    body: str
    received_at: datetime
    processed: bool
    attachment_paths: List[str]


class EmailListResponse(BaseModel):
    emails: List[EmailResponse]
