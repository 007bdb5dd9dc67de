"""Translate domain exceptions into structured JSON responses"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from payment_desk.config import settings
from payment_desk.domain.exceptions import (
    AuthenticationError,
    ConfigurationError,
    InvalidBeneficiaryError,
    InvalidTokenError,
    MalformedRequestError,
    NotFoundError,
    PaymentDeskError,
    TransitionDeniedError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, exc: PaymentDeskError, detail: str | None = None, details: dict | None = None) -> JSONResponse:
    content = {
        "detail": detail or exc.message,
        "error_type": exc.__class__.__name__,
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def malformed_request_handler(request: Request, exc: MalformedRequestError) -> JSONResponse:
    logger.info("MalformedRequestError: %s", exc.message)
    return _error(status.HTTP_400_BAD_REQUEST, exc)


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, exc)


async def invalid_token_handler(request: Request, exc: InvalidTokenError) -> JSONResponse:
    # Token detail stays server-side
    logger.info("InvalidTokenError: %s", exc.message)
    response = _error(status.HTTP_401_UNAUTHORIZED, exc, detail="Authentication required")
    response.delete_cookie(settings.session_cookie_name, path="/")
    return response


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("ConfigurationError: %s", exc.message)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, detail="Authentication configuration error")


async def transition_denied_handler(request: Request, exc: TransitionDeniedError) -> JSONResponse:
    logger.warning("TransitionDeniedError: %s", exc.message)
    code = status.HTTP_403_FORBIDDEN if exc.reason == TransitionDeniedError.ROLE else status.HTTP_409_CONFLICT
    return _error(code, exc, details=exc.details)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning("NotFoundError: %s %s", exc.entity, exc.entity_id)
    return _error(status.HTTP_404_NOT_FOUND, exc, details=exc.details)


async def invalid_beneficiary_handler(request: Request, exc: InvalidBeneficiaryError) -> JSONResponse:
    return _error(422, exc, details=exc.details)


async def payment_desk_error_handler(request: Request, exc: PaymentDeskError) -> JSONResponse:
    logger.error("PaymentDeskError: %s, details=%s", exc.message, exc.details)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, detail="Internal server error")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


EXCEPTION_HANDLERS = {
    MalformedRequestError: malformed_request_handler,
    AuthenticationError: authentication_error_handler,
    InvalidTokenError: invalid_token_handler,
    ConfigurationError: configuration_error_handler,
    TransitionDeniedError: transition_denied_handler,
    NotFoundError: not_found_handler,
    InvalidBeneficiaryError: invalid_beneficiary_handler,
    PaymentDeskError: payment_desk_error_handler,
    Exception: unhandled_exception_handler,
}
