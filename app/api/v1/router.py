"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import coaches, requests

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    requests.router, prefix="/requests", tags=["Requests"]
)
api_router.include_router(
    coaches.router, prefix="/coaches", tags=["Coach matching"]
)
