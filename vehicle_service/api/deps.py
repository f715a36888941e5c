"""
Dépendances d'identité et d'autorisation / Identity and authorization dependencies.
Injectées dans les routes via Depends().

L'authentification est faite par la gateway : on lit seulement les headers de confiance.
Authentication is done by the gateway: only the trusted headers are read here.
"""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_service.database import get_db
from vehicle_service.services.access import Caller, Role
from vehicle_service.services.history_service import HistoryService
from vehicle_service.services.id_generator import IdGenerator, get_id_generator
from vehicle_service.services.photo_service import PhotoService
from vehicle_service.services.photo_storage import PhotoStorage, get_photo_storage
from vehicle_service.services.vehicle_service import VehicleService

USER_HEADER = "X-User-Subject"
ROLES_HEADER = "X-User-Roles"


async def get_caller(
    x_user_subject: str | None = Header(None, alias=USER_HEADER),
    x_user_roles: str | None = Header(None, alias=ROLES_HEADER),
) -> Caller:
    """Appelant depuis les headers gateway / Caller from the gateway headers."""
    if not x_user_subject or not x_user_subject.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Missing {USER_HEADER} header")
    return Caller.from_headers(x_user_subject, x_user_roles)


def require_roles(*roles: Role):
    """Factory de dépendance qui vérifie les rôles / Dependency factory that checks roles."""

    async def _check(caller: Caller = Depends(get_caller)) -> Caller:
        if caller.has_any(roles):
            return caller
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role required: {', '.join(r.value for r in roles)}",
        )

    return _check


def get_photo_service(
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
    ids: IdGenerator = Depends(get_id_generator),
) -> PhotoService:
    return PhotoService(db, storage, ids)


def get_vehicle_service(
    db: AsyncSession = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
    photos: PhotoService = Depends(get_photo_service),
) -> VehicleService:
    return VehicleService(db, ids, photos)


def get_history_service(db: AsyncSession = Depends(get_db)) -> HistoryService:
    return HistoryService(db)
