"""
StockChart Backend - FastAPI Application

Main entry point for the indicator API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockchart.core.config import settings
from stockchart.core.logging import configure_logging
from stockchart.api.v1 import router as api_v1_router
from stockchart.services.indicators import get_indicator_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    configure_logging(settings.log_level, settings.log_json)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Max bars per request: {settings.max_bars}")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    StockChart Indicator Engine API

    ## Architecture
    - **Preprocessing**: cleans raw OHLCV history (drop, sort, dedupe)
    - **Indicator Engine**: SMA, EMA, RSI, MACD, Bollinger Bands, VWAP (pure Python/NumPy)
    - **Level Detector**: support/resistance zones from local extremes
    - **Catalog**: display metadata for the chart toggles

    ## Core Principles
    - Every series is aligned 1:1 with the cleaned bars
    - Undefined slots are null, never zero
    - Recomputed from scratch on every request
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow the local frontend ports
cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    healthy = await get_indicator_service().health_check()
    return {
        "status": "healthy" if healthy else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "StockChart Indicator API",
        "docs": "/docs",
        "health": "/health",
    }
