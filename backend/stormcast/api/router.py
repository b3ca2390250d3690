"""Top-level router aggregation."""

from fastapi import APIRouter

from . import health, metrics, push

api_router = APIRouter()

api_router.include_router(push.router)
api_router.include_router(metrics.router)
api_router.include_router(health.router)
