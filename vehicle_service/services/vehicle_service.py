"""
Service vehicules / Vehicle service.

Enregistrement (unicite VIN + generation d'ID), lecture scopee, mise a jour
partielle, suppression avec cascade photos.
Registration, scoped reads, partial update, deletion with photo cascade.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_service.config import settings
from vehicle_service.exceptions import DuplicateVinError, InfrastructureError
from vehicle_service.models.vehicle import MUTABLE_FIELDS, VIN_CONSTRAINT, Vehicle
from vehicle_service.schemas.vehicle import VehicleCreate, VehicleUpdate
from vehicle_service.services.access import Owned, Scope, Unrestricted, scoped
from vehicle_service.services.id_generator import IdGenerator
from vehicle_service.services.photo_service import CascadeReport, PhotoService
from vehicle_service.services.vehicle_lookup import describe, find_vehicle

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def is_vin_conflict(exc: IntegrityError) -> bool:
    """Violation de la contrainte VIN / VIN unique constraint violation.

    PostgreSQL cite le nom de la contrainte, SQLite la colonne.
    PostgreSQL names the constraint, SQLite names the column.
    """
    message = str(exc.orig)
    return VIN_CONSTRAINT in message or "vehicles.vin" in message


class VehicleService:
    """Cycle de vie des vehicules / Vehicle lifecycle."""

    def __init__(self, db: AsyncSession, ids: IdGenerator, photos: PhotoService):
        self.db = db
        self.ids = ids
        self.photos = photos

    async def register(self, data: VehicleCreate, customer_id: str) -> Vehicle:
        """Enregistrer un vehicule / Register a new vehicle for a customer."""
        logger.info("Registering new vehicle for customer: %s", customer_id)
        vin = data.vin.upper()

        existing = await self.db.execute(select(Vehicle.id).where(Vehicle.vin == vin))
        if existing.first() is not None:
            logger.warning("Attempt to register duplicate VIN: %s", vin)
            raise DuplicateVinError(vin)

        vehicle_id = await self._unique_vehicle_id(data.make, data.model, data.year)
        now = _now()
        vehicle = Vehicle(
            id=vehicle_id,
            customer_id=customer_id,
            make=data.make,
            model=data.model,
            year=data.year,
            vin=vin,
            license_plate=data.license_plate,
            color=data.color,
            mileage=data.mileage if data.mileage is not None else 0,
            created_at=now,
            updated_at=now,
        )
        self.db.add(vehicle)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            # Course concurrente sur le VIN / Concurrent insert of the same VIN
            if is_vin_conflict(exc):
                raise DuplicateVinError(vin) from exc
            raise InfrastructureError("Could not register vehicle") from exc

        logger.info("Registered vehicle %s for customer %s", vehicle.id, customer_id)
        return vehicle

    async def _unique_vehicle_id(self, make: str, model: str, year: int) -> str:
        """Generer un ID libre, avec reessai sur collision / Generate a free ID, retrying on collision."""
        for attempt in range(1, settings.VEHICLE_ID_MAX_ATTEMPTS + 1):
            candidate = self.ids.vehicle_id(make, model, year)
            if await self.db.get(Vehicle, candidate) is None:
                return candidate
            logger.warning("Vehicle ID collision on %s (attempt %d)", candidate, attempt)
        raise InfrastructureError("Could not allocate a unique vehicle ID")

    async def list_for_customer(self, customer_id: str) -> list[Vehicle]:
        logger.info("Fetching all vehicles for customer: %s", customer_id)
        return await self._list(Owned(customer_id))

    async def list_all(self) -> list[Vehicle]:
        """Tous les vehicules (roles privilegies) / All vehicles (privileged callers)."""
        logger.info("Fetching all vehicles in the system")
        return await self._list(Unrestricted())

    async def list_visible(self, scope: Scope) -> list[Vehicle]:
        if isinstance(scope, Owned):
            return await self.list_for_customer(scope.customer_id)
        return await self.list_all()

    async def _list(self, scope: Scope) -> list[Vehicle]:
        query = scoped(select(Vehicle), Vehicle, scope).order_by(Vehicle.created_at, Vehicle.id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_for_customer(self, customer_id: str) -> int:
        result = await self.db.execute(
            select(func.count(Vehicle.id)).where(Vehicle.customer_id == customer_id)
        )
        return result.scalar_one()

    async def get_by_id(self, vehicle_id: str, scope: Scope) -> Vehicle:
        return await find_vehicle(self.db, vehicle_id, scope)

    async def update(self, vehicle_id: str, patch: VehicleUpdate, scope: Scope) -> Vehicle:
        """Mise a jour partielle / Partial update.

        Seuls color, mileage et license_plate non nuls sont appliques ; updated_at
        n'avance que si une valeur change reellement.
        Only non-null color, mileage and license_plate apply; updated_at only
        advances when a value actually changes.
        """
        vehicle = await find_vehicle(self.db, vehicle_id, scope)
        updates = patch.model_dump(exclude_none=True)
        changed = {
            key: value for key, value in updates.items()
            if key in MUTABLE_FIELDS and getattr(vehicle, key) != value
        }
        if not changed:
            logger.info("No changes for vehicle %s", vehicle_id)
            return vehicle

        for key, value in changed.items():
            setattr(vehicle, key, value)
        vehicle.updated_at = _now()
        await self.db.flush()
        logger.info("Updated vehicle %s (%s)", vehicle_id, ", ".join(sorted(changed)))
        return vehicle

    async def delete(self, vehicle_id: str, scope: Scope) -> CascadeReport:
        """Supprimer le vehicule et ses photos / Delete the vehicle and its photos.

        La cascade photos est best-effort cote disque ; les echecs sont journalises
        et remontes dans le rapport.
        The photo cascade is best-effort on disk; failures are logged and reported.
        """
        vehicle = await find_vehicle(self.db, vehicle_id, scope)
        logger.info("Deleting vehicle %s (%s)", vehicle_id, describe(scope))

        report = await self.photos.delete_all_for_vehicle(vehicle.id)
        await self.db.delete(vehicle)
        await self.db.flush()

        if report.files_failed:
            logger.warning(
                "Vehicle %s deleted with %d photo file(s) left on disk",
                vehicle_id, len(report.files_failed),
                extra={"vehicle_id": vehicle_id, "failed_files": report.files_failed},
            )
        else:
            logger.info("Successfully deleted vehicle: %s", vehicle_id)
        return report
