"""
QR Menu - FastAPI Backend Application
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import structlog

from qrmenu.config import settings
from qrmenu.database import SessionLocal
from qrmenu.exceptions import register_exception_handlers
from qrmenu.api import (
    admin,
    auth,
    categories,
    invitations,
    items,
    location_menus,
    locations,
    menus,
    public,
    qr,
    qr_codes,
    restaurants,
)

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting QR Menu API", version="1.0.0")
    yield
    logger.info("Shutting down QR Menu API")


# Create FastAPI application
app = FastAPI(
    title="QR Menu",
    description="Multi-tenant digital menus for restaurants, served through QR codes",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": "1.0.0"}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    checks = {}

    # Check database
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database readiness check failed", error=str(e))
        checks["database"] = "failed"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(restaurants.router, prefix="/api/restaurants", tags=["Restaurants"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(
    locations.router, prefix="/api/restaurants/{restaurant_id}/locations", tags=["Locations"]
)
app.include_router(menus.router, prefix="/api/restaurants/{restaurant_id}/menus", tags=["Menus"])
app.include_router(categories.router, prefix="/api", tags=["Categories"])
app.include_router(items.router, prefix="/api", tags=["Items"])
app.include_router(
    location_menus.router, prefix="/api/locations/{location_id}/menus", tags=["Location Menus"]
)
app.include_router(
    qr_codes.router, prefix="/api/locations/{location_id}/qrcodes", tags=["QR Codes"]
)
app.include_router(qr.router, prefix="/api/qr", tags=["QR Codes"])
app.include_router(invitations.router, prefix="/api", tags=["Invitations"])

# Public pages last: /{restaurant_slug} matches any single-segment path
app.include_router(public.router, tags=["Public"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "qrmenu.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
