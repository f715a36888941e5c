"""Routes API / API routes."""

from fastapi import APIRouter

from vehicle_service.api import photos, vehicles
from vehicle_service.config import settings

api_router = APIRouter(prefix=settings.API_PREFIX)

# photos d'abord : /vehicles/photos/{id} avant /vehicles/{id} / photos first
api_router.include_router(photos.router, prefix="/vehicles", tags=["photos"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
