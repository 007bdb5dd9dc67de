"""Beneficiary creation and per-type field validation"""

import uuid
from dataclasses import asdict

from payment_desk.domain.exceptions import InvalidBeneficiaryError
from payment_desk.domain.models import Beneficiary, BeneficiaryInput, BeneficiaryType
from payment_desk.domain.store import BeneficiaryStore

BANKING_FIELDS = ("bank_name", "bank_account_number", "branch_code")
PRELOADED_FIELDS = ("institution_reference",)


def _is_set(value) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def validate_beneficiary(data: BeneficiaryInput) -> None:
    """
    Check that only the fields meaningful for the beneficiary type are populated.

    - standard: bank name, account number and branch code required; no institution reference
    - preloaded: institution reference required; no banking fields

    Raises:
        InvalidBeneficiaryError: Name missing, required field missing or foreign field present
    """
    if not _is_set(data.name):
        raise InvalidBeneficiaryError("Beneficiary name is required")

    if data.type == BeneficiaryType.STANDARD:
        required, forbidden = BANKING_FIELDS, PRELOADED_FIELDS
    else:
        required, forbidden = PRELOADED_FIELDS, BANKING_FIELDS

    missing = [name for name in required if not _is_set(getattr(data, name))]
    foreign = [name for name in forbidden if _is_set(getattr(data, name))]

    if missing or foreign:
        raise InvalidBeneficiaryError(
            f"Invalid fields for a {data.type.value} beneficiary",
            details={"missing": missing, "not_allowed": foreign},
        )


def create_beneficiary(store: BeneficiaryStore, data: BeneficiaryInput) -> Beneficiary:
    """Validate, assign a new id and append to the store"""
    validate_beneficiary(data)
    beneficiary = Beneficiary(id=f"ben-{uuid.uuid4().hex}", **asdict(data))
    return store.append(beneficiary)
