"""HTTP API routers."""

from fastapi import APIRouter

from app.api import resources, reviews

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(reviews.router)
api_router.include_router(resources.router)

__all__ = ["api_router"]
