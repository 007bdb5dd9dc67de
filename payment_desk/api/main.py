"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from payment_desk.api.dependencies import get_current_identity
from payment_desk.api.exception_handlers import EXCEPTION_HANDLERS
from payment_desk.api.middleware import MetricsMiddleware, RequestIDMiddleware, SessionGatewayMiddleware
from payment_desk.api.v1 import auth, beneficiaries, payments, reference
from payment_desk.infrastructure.database.seed import seed_demo_data
from payment_desk.infrastructure.database.session import SessionLocal, create_tables
from payment_desk.infrastructure.observability.logging import setup_logging
from payment_desk.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    if settings.seed_demo_data:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()
    if not settings.jwt_secret:
        logging.warning("JWT_SECRET is not set; logins and protected routes will fail")
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Payment Desk",
        description="Approval workflow for outbound bank payments",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(SessionGatewayMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Landing point for gateway redirects
    @app.get(settings.login_path)
    def login_required():
        return {"detail": "Authentication required", "login_endpoint": "/api/auth/login"}

    # Register API routers
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])

    protected = [Depends(get_current_identity)]
    prefix = settings.protected_prefix
    app.include_router(payments.router, prefix=prefix, tags=["payments"], dependencies=protected)
    app.include_router(beneficiaries.router, prefix=prefix, tags=["beneficiaries"], dependencies=protected)
    app.include_router(reference.router, prefix=prefix, tags=["reference"], dependencies=protected)

    return app


app = create_app()
