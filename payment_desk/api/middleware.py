"""FastAPI middleware for request tracing, metrics and session gating"""

import logging
import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from payment_desk.config import settings
from payment_desk.domain.exceptions import ConfigurationError, InvalidTokenError
from payment_desk.domain.sessions import verify_token
from payment_desk.infrastructure.observability.metrics import (
    request_duration_histogram,
    session_rejection_counter,
)

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add unique request ID to each request for distributed tracing"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request metrics"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        request_duration_histogram.labels(
            method=request.method,
            endpoint=request.url.path,
            status=response.status_code,
        ).observe(duration)

        return response


def is_protected_path(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


class SessionGatewayMiddleware(BaseHTTPMiddleware):
    """
    Require a valid session cookie on every path under the protected prefix.

    - no cookie: redirect to login
    - invalid or expired token: redirect to login and delete the cookie
    - valid token: identity goes on request.state for downstream handlers

    This is the only place request.state.identity is written.
    """

    async def dispatch(self, request: Request, call_next):
        if not is_protected_path(request.url.path, settings.protected_prefix):
            return await call_next(request)

        # Never trust identity context arriving from outside
        request.state.identity = None

        token = request.cookies.get(settings.session_cookie_name)
        if not token:
            session_rejection_counter.labels(reason="missing").inc()
            return RedirectResponse(url=settings.login_path)

        try:
            identity = verify_token(token)
        except InvalidTokenError as e:
            session_rejection_counter.labels(reason="invalid").inc()
            logger.info("Rejected session: %s", e.message, extra={"path": request.url.path})
            response = RedirectResponse(url=settings.login_path)
            response.delete_cookie(settings.session_cookie_name, path="/")
            return response
        except ConfigurationError as e:
            session_rejection_counter.labels(reason="config_error").inc()
            logger.error("Session verification unavailable: %s", e.message)
            return JSONResponse(
                status_code=500,
                content={"detail": "Authentication configuration error"},
            )

        request.state.identity = identity

        response: Response = await call_next(request)
        response.headers["X-User-Role"] = identity.role.value
        response.headers["X-User-Email"] = identity.email
        return response
