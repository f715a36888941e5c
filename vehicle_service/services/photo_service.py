"""
Service photos vehicule / Vehicle photo service.

Upload multi-fichiers (tout valider puis tout ecrire), listing, service des
octets, suppression unitaire et cascade. Le disque n'est pas transactionnel
avec la base : les fenetres d'incoherence sont acceptees et journalisees.
Multi-file upload (validate all, then write all), listing, byte serving,
single and cascade deletion. Disk writes are not transactional with the
database: inconsistency windows are accepted and logged.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_service.config import settings
from vehicle_service.exceptions import (
    InvalidFileTypeError,
    PhotoNotFoundError,
    PhotoNotReadableError,
    PhotoStorageError,
    PhotoUploadError,
    UnauthorizedPhotoAccessError,
)
from vehicle_service.models.vehicle import Vehicle
from vehicle_service.models.vehicle_photo import VehiclePhoto
from vehicle_service.services.access import Scope, can_access
from vehicle_service.services.id_generator import IdGenerator
from vehicle_service.services.photo_storage import PhotoStorage
from vehicle_service.services.vehicle_lookup import describe, find_vehicle

logger = logging.getLogger(__name__)


@dataclass
class IncomingPhoto:
    """Fichier recu, deja lu en memoire / Received file, already read into memory."""
    filename: str | None
    content_type: str | None
    content: bytes


@dataclass
class PhotoUploadResult:
    photo_ids: list[str] = field(default_factory=list)
    urls: list[str] = field(default_factory=list)


@dataclass
class CascadeReport:
    """Bilan de la suppression des photos d'un vehicule / Outcome of a vehicle photo cascade."""
    vehicle_id: str
    rows_deleted: int = 0
    files_deleted: int = 0
    files_missing: int = 0
    files_failed: list[str] = field(default_factory=list)


class PhotoService:
    """Photos des vehicules / Vehicle photos."""

    def __init__(self, db: AsyncSession, storage: PhotoStorage, ids: IdGenerator):
        self.db = db
        self.storage = storage
        self.ids = ids

    def photo_url(self, vehicle_id: str, file_name: str) -> str:
        return f"{settings.PHOTO_URL_PREFIX}/{vehicle_id}/photos/{file_name}"

    # --- Upload ---

    def _validate(self, files: list[IncomingPhoto]) -> list[IncomingPhoto]:
        """Valider tout le lot avant ecriture / Validate the whole batch before writing.

        Les fichiers vides sont ignores / Empty files are skipped.
        """
        accepted = []
        for f in files:
            if not f.content:
                logger.debug("Skipping empty upload %s", f.filename)
                continue
            if not (f.content_type or "").startswith("image/"):
                logger.warning("Rejected non-image upload %s (%s)", f.filename, f.content_type)
                raise InvalidFileTypeError(f.filename)
            if len(f.content) > settings.MAX_PHOTO_SIZE_BYTES:
                raise PhotoUploadError(
                    f"Photo too large: {f.filename} (max {settings.MAX_PHOTO_SIZE_BYTES} bytes)"
                )
            accepted.append(f)
        return accepted

    async def upload(self, vehicle_id: str, files: list[IncomingPhoto], scope: Scope) -> PhotoUploadResult:
        """Uploader des photos / Upload photos for a vehicle.

        Aucun fichier ecrit ni ligne creee si un fichier du lot est invalide.
        No file is written and no row inserted if any file in the batch is invalid.
        """
        logger.info("Uploading %d photos for vehicle: %s", len(files), vehicle_id)
        await find_vehicle(self.db, vehicle_id, scope)
        accepted = self._validate(files)

        result = PhotoUploadResult()
        written: list[Path] = []
        try:
            for f in accepted:
                file_name = self.ids.photo_file_name(vehicle_id, f.filename)
                path = self.storage.write(vehicle_id, file_name, f.content)
                written.append(path)

                photo = VehiclePhoto(
                    id=self.ids.photo_id(),
                    vehicle_id=vehicle_id,
                    file_name=file_name,
                    file_path=str(path),
                    file_url=self.photo_url(vehicle_id, file_name),
                    file_size=len(f.content),
                    content_type=f.content_type,
                    uploaded_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
                )
                self.db.add(photo)
                result.photo_ids.append(photo.id)
                result.urls.append(photo.file_url)
            await self.db.flush()
        except (OSError, SQLAlchemyError) as exc:
            logger.error(
                "Photo upload failed for vehicle %s, removing %d written file(s)",
                vehicle_id, len(written), exc_info=True, extra={"vehicle_id": vehicle_id},
            )
            for path in written:
                self._discard(path)
            raise PhotoStorageError(f"Failed to store photos for vehicle {vehicle_id}") from exc

        logger.info("Uploaded %d photo(s) for vehicle %s", len(result.photo_ids), vehicle_id)
        return result

    def _discard(self, path: Path) -> None:
        try:
            self.storage.delete(path)
        except OSError:
            logger.warning("Could not remove orphan photo file %s", path, exc_info=True,
                           extra={"path": str(path)})

    # --- Lecture / Read ---

    async def list_for_vehicle(self, vehicle_id: str, scope: Scope) -> list[VehiclePhoto]:
        await find_vehicle(self.db, vehicle_id, scope)
        result = await self.db.execute(
            select(VehiclePhoto)
            .where(VehiclePhoto.vehicle_id == vehicle_id)
            .order_by(VehiclePhoto.uploaded_at, VehiclePhoto.id)
        )
        return list(result.scalars().all())

    async def get_by_id(self, photo_id: str, scope: Scope) -> VehiclePhoto:
        """Photo par ID, controle en deux temps / Photo by ID, two-step check.

        1. la ligne existe / the row exists (PhotoNotFoundError)
        2. le vehicule parent est visible / the parent vehicle is visible (UnauthorizedPhotoAccessError)
        """
        photo = await self.db.get(VehiclePhoto, photo_id)
        if photo is None:
            raise PhotoNotFoundError(photo_id)

        vehicle = await self.db.get(Vehicle, photo.vehicle_id)
        if vehicle is None or not can_access(vehicle.customer_id, scope):
            logger.warning(
                "Photo %s requested by %s outside its vehicle scope", photo_id, describe(scope),
                extra={"photo_id": photo_id, "vehicle_id": photo.vehicle_id},
            )
            raise UnauthorizedPhotoAccessError(photo_id)
        return photo

    async def load_as_resource(self, vehicle_id: str, file_name: str, scope: Scope) -> Path:
        """Chemin du fichier a servir / Path of the file to serve.

        Le nom est valide avant toute lecture disque / The name is checked before any disk read.
        """
        await find_vehicle(self.db, vehicle_id, scope)
        path = self.storage.resolve(vehicle_id, file_name)
        if not path.is_file() or not os.access(path, os.R_OK):
            raise PhotoNotReadableError(file_name)
        return path

    # --- Suppression / Deletion ---

    async def delete_single(self, photo_id: str, scope: Scope) -> None:
        photo = await self.get_by_id(photo_id, scope)
        if not self.storage.is_within(photo.vehicle_id, photo.file_path):
            logger.error("Photo %s points outside its vehicle directory, file left untouched",
                         photo_id, extra={"photo_id": photo_id, "path": photo.file_path})
        else:
            try:
                if not self.storage.delete(photo.file_path):
                    logger.info("Photo file already missing: %s", photo.file_path)
            except OSError:
                logger.warning("Could not delete photo file %s", photo.file_path, exc_info=True,
                               extra={"photo_id": photo_id, "path": photo.file_path})

        await self.db.delete(photo)
        await self.db.flush()
        logger.info("Deleted photo %s of vehicle %s", photo_id, photo.vehicle_id)

    async def delete_all_for_vehicle(self, vehicle_id: str) -> CascadeReport:
        """Cascade : fichiers best-effort puis suppression groupee des lignes.

        Sans controle de propriete : appele uniquement depuis une suppression de
        vehicule deja autorisee.
        No ownership check: only called from an already-authorized vehicle deletion.
        """
        logger.info("Deleting all photos for vehicle: %s", vehicle_id)
        report = CascadeReport(vehicle_id=vehicle_id)

        result = await self.db.execute(select(VehiclePhoto).where(VehiclePhoto.vehicle_id == vehicle_id))
        photos = result.scalars().all()

        for photo in photos:
            if not self.storage.is_within(vehicle_id, photo.file_path):
                logger.error("Photo %s points outside its vehicle directory, file left untouched",
                             photo.id, extra={"photo_id": photo.id, "path": photo.file_path})
                report.files_failed.append(photo.file_path)
                continue
            try:
                if self.storage.delete(photo.file_path):
                    report.files_deleted += 1
                else:
                    report.files_missing += 1
            except OSError:
                logger.warning("Could not delete photo file: %s", photo.file_path, exc_info=True,
                               extra={"photo_id": photo.id, "path": photo.file_path})
                report.files_failed.append(photo.file_path)

        deleted = await self.db.execute(delete(VehiclePhoto).where(VehiclePhoto.vehicle_id == vehicle_id))
        report.rows_deleted = deleted.rowcount if deleted.rowcount is not None else len(photos)
        logger.info(
            "Deleted %d photo records for vehicle: %s (%d files, %d missing, %d failed)",
            report.rows_deleted, vehicle_id, report.files_deleted, report.files_missing,
            len(report.files_failed), extra={"vehicle_id": vehicle_id},
        )
        return report
