"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finlytics_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finlytics_engine.api.v1 import classify, fiscal_year, tax
from finlytics_engine.infrastructure.observability.logging import setup_logging
from finlytics_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Finlytics Engine",
        description="Fiscal-year, tax-slab and statement classification service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(fiscal_year.router, prefix="/v1", tags=["fiscal-year"])
    app.include_router(tax.router, prefix="/v1", tags=["tax"])
    app.include_router(classify.router, prefix="/v1", tags=["classification"])

    return app


app = create_app()
