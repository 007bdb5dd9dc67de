"""Read-only dashboard data: current session, source bank accounts, inbound emails"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from payment_desk.api.dependencies import get_current_identity
from payment_desk.api.v1.schemas import (
    BankAccountListResponse,
    BankAccountResponse,
    EmailListResponse,
    EmailResponse,
    SessionResponse,
)
from payment_desk.domain.exceptions import NotFoundError
from payment_desk.domain.models import Identity
from payment_desk.infrastructure.database.repositories import BankAccountRepository, EmailRepository
from payment_desk.infrastructure.database.session import get_db

router = APIRouter()


@router.get("/session", response_model=SessionResponse)
def current_session(identity: Identity = Depends(get_current_identity)):
    return SessionResponse(email=identity.email, role=identity.role)


@router.get("/bank-accounts", response_model=BankAccountListResponse)
def list_bank_accounts(db: Session = Depends(get_db)):
    accounts = BankAccountRepository(db).list()
    return BankAccountListResponse(
        bank_accounts=[BankAccountResponse.model_validate(a, from_attributes=True) for a in accounts]
    )


@router.get("/emails", response_model=EmailListResponse)
def list_emails(
    processed: Optional[bool] = Query(None, description="Filter on whether a payment was created from the email"),
    db: Session = Depends(get_db),
):
    emails = EmailRepository(db).list(processed=processed)
    return EmailListResponse(emails=[EmailResponse.model_validate(e, from_attributes=True) for e in emails])


@router.get("/emails/{email_id}", response_model=EmailResponse)
def get_email(email_id: str, db: Session = Depends(get_db)):
    email = EmailRepository(db).get(email_id)
    if email is None:
        raise NotFoundError("Email", email_id)
    return EmailResponse.model_validate(email, from_attributes=True)
