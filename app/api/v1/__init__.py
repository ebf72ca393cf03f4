"""
API v1 router aggregation.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import containers, exceptions, notifications, risk

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    containers.router,
    prefix="/containers",
    tags=["Containers"],
)

api_router.include_router(
    exceptions.router,
    prefix="/exceptions",
    tags=["Exceptions"],
)

api_router.include_router(
    notifications.router,
    prefix="/users",
    tags=["Notifications"],
)

api_router.include_router(
    risk.router,
    prefix="/risk",
    tags=["Risk Assessment"],
)
