"""Schémas photos / Photo schemas."""

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from vehicle_service.schemas.vehicle import CamelModel


class VehiclePhotoRead(CamelModel):
    """Lecture photo / Read photo (le chemin disque n'est pas expose / disk path not exposed)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    vehicle_id: str
    file_name: str
    file_url: str
    file_size: int | None = None
    content_type: str | None = None
    uploaded_at: str


class PhotoUploadResponse(CamelModel):
    photo_ids: list[str]
    urls: list[str]
