"""
Chauffage Storefront

Cart, checkout and shipping core of an online heating-equipment shop
delivering across the 58 Algerian wilayas. Payment is cash on delivery.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .bootstrap import build_services
from .core.config import Settings, get_settings
from .core.errors import StorefrontError
from .routes import (
    admin_router,
    cart_router,
    orders_router,
    payments_router,
    products_router,
    regions_router,
)
from .security.identity import IdentityMiddleware, IdentityProvider

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings = app.state.services.settings
    logger.info(f"{settings.app_name} starting up...")
    logger.info(
        f"Shipping fallback: {settings.default_shipping_cost} {settings.currency}, "
        f"free from: {settings.free_shipping_threshold or 'never'}"
    )
    yield
    logger.info(f"{settings.app_name} shutting down...")


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.to_dict()},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": {"kind": "VALIDATION_ERROR", "message": "Validation failed", "details": details},
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {"kind": "INTERNAL_ERROR", "message": "Internal server error"},
        },
    )


def create_app(
    settings: Optional[Settings] = None,
    identity_provider: Optional[IdentityProvider] = None,
) -> FastAPI:
    """Build the application with its own isolated set of services"""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Cart, checkout and shipping for heating equipment, cash on delivery",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.services = build_services(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Caller identity
    app.add_middleware(IdentityMiddleware, provider=identity_provider)

    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include API routers
    app.include_router(regions_router)
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(payments_router)
    app.include_router(orders_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "storefront"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
