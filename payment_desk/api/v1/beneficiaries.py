"""GET/POST /dashboard/beneficiaries - append-only beneficiary register"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from payment_desk.api.v1.schemas import BeneficiaryCreate, BeneficiaryListResponse, BeneficiaryResponse
from payment_desk.domain.beneficiaries import create_beneficiary
from payment_desk.domain.models import BeneficiaryInput
from payment_desk.infrastructure.database.repositories import BeneficiaryRepository
from payment_desk.infrastructure.database.session import get_db

router = APIRouter()


@router.get("/beneficiaries", response_model=BeneficiaryListResponse)
def list_beneficiaries(db: Session = Depends(get_db)):
    beneficiaries = BeneficiaryRepository(db).list()
    return BeneficiaryListResponse(
        beneficiaries=[BeneficiaryResponse.model_validate(b, from_attributes=True) for b in beneficiaries]
    )


@router.post("/beneficiaries", response_model=BeneficiaryResponse, status_code=status.HTTP_201_CREATED)
def add_beneficiary(payload: BeneficiaryCreate, db: Session = Depends(get_db)):
    """
    Register a new beneficiary.

    Standard beneficiaries need bank name, account number and branch code;
    preloaded ones need an institution reference. Mixing the two is a 422.
    """
    beneficiary = create_beneficiary(BeneficiaryRepository(db), BeneficiaryInput(**payload.model_dump()))
    db.commit()

    logging.info(
        "Beneficiary created",
        extra={"beneficiary_id": beneficiary.id, "type": beneficiary.type.value},
    )
    return BeneficiaryResponse.model_validate(beneficiary, from_attributes=True)
