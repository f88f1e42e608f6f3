# routers/__init__.py

from fastapi import APIRouter

from .event_access import router as event_access_router
from .health import router as health_router


api_router = APIRouter()

api_router.include_router(event_access_router)
api_router.include_router(health_router)
