"""Record store contract the domain services depend on.

Implementations must hand out detached copies: mutating a returned object
never changes what is stored.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from payment_desk.domain.models import (
    BankAccount,
    Beneficiary,
    Payment,
    PaymentEmail,
    PaymentStatus,
)


class PaymentStore(ABC):
    """Persistence for payments"""

    @abstractmethod
    def get(self, payment_id: str) -> Optional[Payment]:
        raise NotImplementedError

    @abstractmethod
    def list(self, status: Optional[PaymentStatus] = None) -> List[Payment]:
        raise NotImplementedError

    @abstractmethod
    def append(self, payment: Payment) -> Payment:
        raise NotImplementedError

    @abstractmethod
    def compare_and_set_status(
        self,
        payment_id: str,
        expected: PaymentStatus,
        new: PaymentStatus,
        updated_at: datetime,
        date_approved: Optional[datetime] = None,
    ) -> Optional[Payment]:
        """
        Move a payment from `expected` to `new` in one step.

        Returns the updated payment, or None when the payment is missing or
        its status is no longer `expected`. `date_approved` is only written
        when given.
        """
        raise NotImplementedError


class BeneficiaryStore(ABC):
    """Append-only persistence for beneficiaries"""

    @abstractmethod
    def get(self, beneficiary_id: str) -> Optional[Beneficiary]:
        raise NotImplementedError

    @abstractmethod
    def list(self) -> List[Beneficiary]:
        raise NotImplementedError

    @abstractmethod
    def append(self, beneficiary: Beneficiary) -> Beneficiary:
        raise NotImplementedError


class BankAccountStore(ABC):
    """Read-only reference data"""

    @abstractmethod
    def get(self, account_id: str) -> Optional[BankAccount]:
        raise NotImplementedError

    @abstractmethod
    def list(self) -> List[BankAccount]:
        raise NotImplementedError


class EmailStore(ABC):
    """Read-only view of ingested emails"""

    @abstractmethod
    def get(self, email_id: str) -> Optional[PaymentEmail]:
        raise NotImplementedError

    @abstractmethod
    def list(self, processed: Optional[bool] = None) -> List[PaymentEmail]:
        raise NotImplementedError
