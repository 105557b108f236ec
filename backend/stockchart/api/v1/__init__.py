"""
API v1 Router

All API endpoints for the chart frontend.
"""

from fastapi import APIRouter

from stockchart.api.v1.endpoints import indicators

router = APIRouter()

# Include all endpoint routers
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
