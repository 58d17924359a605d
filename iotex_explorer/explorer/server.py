"""
IoTeX Explorer - Explorer Server
==================================
FastAPI server: address page, address API, health check.
"""

import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from iotex_explorer.api.address import ADDRESS_ROUTES
from iotex_explorer.api.middleware import (
    CacheControlMiddleware,
    ErrorHandlingMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from iotex_explorer.api.routes import register_routes
from iotex_explorer.api.schemas import HealthResponse, error_envelope, validation_errors
from iotex_explorer.config import ExplorerSettings, get_settings, validate_config
from iotex_explorer.constants import HEALTH_PATH, INVALID_REQUEST, MSG_INVALID_REQUEST
from iotex_explorer.gateway.client import GatewayProtocol, create_gateway
from iotex_explorer.logging_setup import get_logger, setup_logging_from_settings
from iotex_explorer.services.address_service import AddressService
from iotex_explorer.version import get_version_string

logger = get_logger("explorer.server")

TEMPLATES_DIR = Path(__file__).parent / "templates"


# ============================================================================
# EXPLORER APP
# ============================================================================

def create_explorer_app(
    settings: Optional[ExplorerSettings] = None,
    gateway: Optional[GatewayProtocol] = None,
) -> FastAPI:
    """
    Create FastAPI explorer application.

    Args:
        settings: Explorer configuration (default: get_settings())
        gateway: iotexCore gateway; when omitted an IotexCoreClient is built
            from settings and closed on shutdown

    Returns:
        FastAPI: Explorer app

    Raises:
        InvalidRouteError: route table contains an unsupported method
    """
    settings = settings or get_settings()
    owns_gateway = gateway is None
    if gateway is None:
        gateway = create_gateway(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Explorer started",
            extra_data={"gateway": settings.gateway_url, "prefix": settings.route_prefix}
        )
        try:
            yield
        finally:
            if owns_gateway:
                await gateway.aclose()
            logger.info("Explorer stopped")

    app = FastAPI(
        title="IoTeX Explorer",
        description="Address API over the iotexCore gateway",
        version=get_version_string(),
        lifespan=lifespan,
    )

    is_valid, errors = validate_config(settings)
    if not is_valid:
        for error in errors:
            logger.warning(f"Config: {error}")

    # Store instances
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.address_service = AddressService(gateway, timeout=settings.gateway_timeout)
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    if settings.static_dir is not None and Path(settings.static_dir).is_dir():
        app.mount(
            f"{settings.route_prefix}/static",
            StaticFiles(directory=str(settings.static_dir)),
            name="static"
        )

    # Middleware (last added = outermost)
    app.add_middleware(CacheControlMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api_cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )

    # ========================================================================
    # ERROR HANDLERS
    # ========================================================================

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            f"Invalid request body on {request.url.path}",
            extra_data={"errors": len(exc.errors())}
        )
        return JSONResponse(
            status_code=422,
            content=error_envelope(
                INVALID_REQUEST, MSG_INVALID_REQUEST,
                {"errors": validation_errors(exc.errors())}
            ),
        )

    # ========================================================================
    # ROUTES
    # ========================================================================

    register_routes(app, ADDRESS_ROUTES, prefix=settings.route_prefix)

    @app.get(f"{settings.route_prefix}{HEALTH_PATH}", response_model=HealthResponse)
    async def health():
        """Liveness check"""
        return HealthResponse(
            status="ok",
            version=get_version_string(),
            timestamp=int(time.time()),
        )

    return app


# ============================================================================
# RUN EXPLORER
# ============================================================================

def run_explorer(
    settings: Optional[ExplorerSettings] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
):
    """
    Run explorer server.

    Args:
        settings: Explorer configuration
        host: Server host (default: settings.api_host)
        port: Server port (default: settings.api_port)
    """
    settings = settings or get_settings()
    setup_logging_from_settings(settings)

    host = host or settings.api_host
    port = port or settings.api_port

    app = create_explorer_app(settings)

    logger.info(f"Starting IoTeX Explorer on {host}:{port}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.log_level.lower()
    )


__all__ = [
    "create_explorer_app",
    "run_explorer",
]
