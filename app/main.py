"""
Vendor Analytics Engine
Main FastAPI application
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import get_settings
from app.utils.logger import log
from app import __version__

# Import routers
from app.api import health, analytics

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup
    log.info(f"Starting {settings.app_name} v{__version__}")
    log.info(f"Environment: {settings.environment}")
    log.info(f"Upstream marketplace API: {settings.analytics_api_base_url}")

    yield

    # Shutdown
    log.info("Shutting down application")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="""
    Vendor performance analytics for the marketplace dashboard

    - Daily or monthly series of views, bookings and revenue
    - Booking status breakdown (pending / confirmed / completed / cancelled)
    - Period-over-period trend percentages

    Reads the upstream analytics dashboard and falls back to aggregating raw
    bookings when it is unavailable. The `source` field tells which path served
    the response.
    """,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Gzip compression (long daily series compress well)
from starlette.middleware.gzip import GZipMiddleware
app.add_middleware(GZipMiddleware, minimum_size=500)

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(analytics.router)


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "status": "/status",
        "endpoints": {
            "vendor_analytics": "GET /analytics/vendor/{vendor_id}?range=30d"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
