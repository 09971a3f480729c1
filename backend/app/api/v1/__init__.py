"""
API Version 1 Router.

Combines all API endpoints under /api/v1 prefix.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import orders

router = APIRouter()

# Include endpoint routers
router.include_router(orders.router, prefix="/orders", tags=["Orders"])
