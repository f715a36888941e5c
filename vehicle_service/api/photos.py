"""
Routes Photos vehicule / Vehicle photo API routes.
Upload multipart, listing, service des fichiers, suppression.
"""

import mimetypes

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import FileResponse

from vehicle_service.api.deps import get_photo_service, require_roles
from vehicle_service.config import settings
from vehicle_service.rate_limit import limiter
from vehicle_service.schemas.photo import PhotoUploadResponse, VehiclePhotoRead
from vehicle_service.schemas.vehicle import VehicleMessage
from vehicle_service.services.access import Caller, Role, scope_for
from vehicle_service.services.photo_service import IncomingPhoto, PhotoService

router = APIRouter()

_customers = require_roles(Role.CUSTOMER)


# Routes par ID photo declarees avant /{vehicle_id}/... / Photo-ID routes declared first

@router.get("/photos/{photo_id}", response_model=VehiclePhotoRead)
async def get_photo(
    photo_id: str,
    service: PhotoService = Depends(get_photo_service),
    caller: Caller = Depends(_customers),
):
    """Metadonnees d'une photo / Photo metadata."""
    return await service.get_by_id(photo_id, scope_for(caller))


@router.delete("/photos/{photo_id}", response_model=VehicleMessage, response_model_exclude_none=True)
async def delete_photo(
    photo_id: str,
    service: PhotoService = Depends(get_photo_service),
    caller: Caller = Depends(_customers),
):
    await service.delete_single(photo_id, scope_for(caller))
    return VehicleMessage(message="Photo deleted successfully")


@router.post("/{vehicle_id}/photos", response_model=PhotoUploadResponse)
@limiter.limit(settings.RATE_LIMIT_UPLOAD)
async def upload_photos(
    request: Request,
    vehicle_id: str,
    files: list[UploadFile] = File(...),
    service: PhotoService = Depends(get_photo_service),
    caller: Caller = Depends(_customers),
):
    """Uploader une ou plusieurs photos / Upload one or more photos."""
    incoming = [
        IncomingPhoto(filename=f.filename, content_type=f.content_type, content=await f.read())
        for f in files
    ]
    result = await service.upload(vehicle_id, incoming, scope_for(caller))
    return PhotoUploadResponse(photo_ids=result.photo_ids, urls=result.urls)


@router.get("/{vehicle_id}/photos", response_model=list[VehiclePhotoRead])
async def list_photos(
    vehicle_id: str,
    service: PhotoService = Depends(get_photo_service),
    caller: Caller = Depends(_customers),
):
    return await service.list_for_vehicle(vehicle_id, scope_for(caller))


@router.get("/{vehicle_id}/photos/{file_name}")
async def serve_photo(
    vehicle_id: str,
    file_name: str,
    service: PhotoService = Depends(get_photo_service),
    caller: Caller = Depends(_customers),
):
    """Servir les octets de la photo / Serve the photo bytes (inline)."""
    path = await service.load_as_resource(vehicle_id, file_name, scope_for(caller))
    media_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    return FileResponse(
        path,
        media_type=media_type,
        headers={"Content-Disposition": f'inline; filename="{path.name}"'},
    )
