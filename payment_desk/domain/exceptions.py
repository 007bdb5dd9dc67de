"""Domain-specific exceptions"""


class PaymentDeskError(Exception):
    """Base exception for domain layer"""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MalformedRequestError(PaymentDeskError):
    """Request body is unparsable or missing required fields"""

    pass


class AuthenticationError(PaymentDeskError):
    """Credentials did not match an operator identity"""

    pass


class ConfigurationError(PaymentDeskError):
    """Signing secret or credential configuration is missing or invalid"""

    pass


class InvalidTokenError(PaymentDeskError):
    """Session token is expired, malformed or tampered with"""

    pass


class TransitionDeniedError(PaymentDeskError):
    """Payment status change is not allowed from the current state or for the caller's role"""

    STATE = "illegal_state"
    ROLE = "role_not_permitted"

    def __init__(self, current_status: str, action: str, role: str, reason: str) -> None:
        self.current_status = current_status
        self.action = action
        self.role = role
        self.reason = reason
        if reason == self.ROLE:
            message = f"Role '{role}' may not {action} a payment in status '{current_status}'"
        else:
            message = f"Cannot {action} a payment in status '{current_status}'"
        super().__init__(
            message,
            details={
                "current_status": current_status,
                "action": action,
                "role": role,
                "reason": reason,
            },
        )


class NotFoundError(PaymentDeskError):
    """Referenced record does not exist"""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found", details={"id": entity_id})


class InvalidBeneficiaryError(PaymentDeskError):
    """Beneficiary input does not match the fields required by its type"""

    pass
