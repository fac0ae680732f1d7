"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from sitefinance.api.middleware import RequestIDMiddleware, MetricsMiddleware
from sitefinance.api.v1 import documents, financials, projects
from sitefinance.infrastructure.observability.logging import setup_logging
from sitefinance.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Site Finance 360",
        description="Project financials, cost control and document feed for construction projects",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(financials.router, prefix="/v1", tags=["financials"])
    app.include_router(documents.router, prefix="/v1", tags=["documents"])
    app.include_router(projects.router, prefix="/v1", tags=["projects"])

    return app


app = create_app()
