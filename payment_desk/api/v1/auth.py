"""POST /api/auth/login and /api/auth/logout - session cookie issuance"""

import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from payment_desk.api.dependencies import get_request_id
from payment_desk.api.v1.schemas import LoginRequest, SuccessResponse
from payment_desk.config import settings
from payment_desk.domain.credentials import authenticate
from payment_desk.domain.exceptions import AuthenticationError, ConfigurationError, MalformedRequestError
from payment_desk.domain.sessions import issue_token
from payment_desk.infrastructure.observability.logging import log_login
from payment_desk.infrastructure.observability.metrics import login_counter

router = APIRouter()


async def _parse_login(request: Request) -> LoginRequest:
    """Reject anything that is not a JSON object with non-empty string email and password"""
    try:
        body = await request.json()
    except ValueError as e:
        raise MalformedRequestError("Invalid request body") from e

    try:
        return LoginRequest.model_validate(body)
    except ValidationError as e:
        raise MalformedRequestError("Email and password are required") from e


@router.post("/login", response_model=SuccessResponse)
async def login(request: Request):
    """
    Exchange operator credentials for a session cookie.

    Flow:
    1. Parse and validate the body (400 on failure)
    2. Check the password against the operator's bcrypt hash (401 on mismatch)
    3. Sign a session token and set it as an HTTP-only cookie
    """
    request_id = get_request_id(request)

    try:
        credentials = await _parse_login(request)
    except MalformedRequestError:
        login_counter.labels(outcome="malformed").inc()
        raise

    try:
        # bcrypt is deliberately slow; keep it off the event loop
        identity = await run_in_threadpool(authenticate, credentials.email, credentials.password)
        token = issue_token(identity)
    except AuthenticationError:
        login_counter.labels(outcome="invalid_credentials").inc()
        log_login(request_id, credentials.email, "invalid_credentials")
        raise
    except ConfigurationError:
        login_counter.labels(outcome="config_error").inc()
        log_login(request_id, credentials.email, "config_error")
        raise

    login_counter.labels(outcome="success").inc()
    log_login(request_id, identity.email, "success")

    response = JSONResponse(content={"success": True})
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post("/logout", response_model=SuccessResponse)
def logout():
    """Clear the session cookie"""
    response = JSONResponse(content={"success": True})
    response.delete_cookie(settings.session_cookie_name, path="/")
    logging.info("Logout", extra={"step": "logout"})
    return response
