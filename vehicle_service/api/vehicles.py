"""Routes Vehicules / Vehicle API routes."""

from fastapi import APIRouter, Depends, Request

from vehicle_service.api.deps import get_history_service, get_vehicle_service, require_roles
from vehicle_service.config import settings
from vehicle_service.models.vehicle import Vehicle
from vehicle_service.rate_limit import limiter
from vehicle_service.schemas.history import ServiceHistoryRecord
from vehicle_service.schemas.vehicle import (
    VehicleCreate,
    VehicleMessage,
    VehicleRead,
    VehicleSummary,
    VehicleUpdate,
)
from vehicle_service.services.access import Caller, Role, scope_for
from vehicle_service.services.history_service import HistoryService
from vehicle_service.services.vehicle_service import VehicleService

router = APIRouter()

_readers = require_roles(Role.CUSTOMER, Role.ADMIN, Role.EMPLOYEE)


def _vehicle_to_summary(vehicle: Vehicle) -> VehicleSummary:
    return VehicleSummary(
        vehicle_id=vehicle.id,
        customer_id=vehicle.customer_id,
        make=vehicle.make,
        model=vehicle.model,
        year=vehicle.year,
        license_plate=vehicle.license_plate,
        color=vehicle.color,
        mileage=vehicle.mileage,
    )


def _vehicle_to_read(vehicle: Vehicle) -> VehicleRead:
    """Convertir vehicule ORM en schema Read / Convert ORM to Read schema."""
    return VehicleRead(
        **_vehicle_to_summary(vehicle).model_dump(),
        vin=vehicle.vin,
        created_at=vehicle.created_at,
        updated_at=vehicle.updated_at,
    )


@router.post("/", response_model=VehicleMessage, status_code=201)
@limiter.limit(settings.RATE_LIMIT_REGISTER)
async def register_vehicle(
    request: Request,
    data: VehicleCreate,
    service: VehicleService = Depends(get_vehicle_service),
    caller: Caller = Depends(require_roles(Role.CUSTOMER, Role.ADMIN, Role.SUPER_ADMIN)),
):
    """Enregistrer un vehicule pour l'appelant / Register a vehicle for the caller."""
    vehicle = await service.register(data, caller.customer_id)
    return VehicleMessage(message="Vehicle added", vehicle_id=vehicle.id)


@router.get("/", response_model=list[VehicleSummary])
async def list_vehicles(
    service: VehicleService = Depends(get_vehicle_service),
    caller: Caller = Depends(_readers),
):
    """Lister les vehicules (tous pour admin/employe) / List vehicles (all for admin/employee)."""
    vehicles = await service.list_visible(scope_for(caller))
    return [_vehicle_to_summary(v) for v in vehicles]


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(
    vehicle_id: str,
    service: VehicleService = Depends(get_vehicle_service),
    caller: Caller = Depends(_readers),
):
    """Voir un vehicule / Get vehicle detail."""
    vehicle = await service.get_by_id(vehicle_id, scope_for(caller))
    return _vehicle_to_read(vehicle)


@router.put("/{vehicle_id}", response_model=VehicleMessage)
async def update_vehicle(
    vehicle_id: str,
    data: VehicleUpdate,
    service: VehicleService = Depends(get_vehicle_service),
    caller: Caller = Depends(_readers),
):
    """Modifier couleur, kilometrage, immatriculation / Update color, mileage, license plate."""
    await service.update(vehicle_id, data, scope_for(caller))
    return VehicleMessage(message="Vehicle updated", vehicle_id=vehicle_id)


@router.delete("/{vehicle_id}", response_model=VehicleMessage)
async def delete_vehicle(
    vehicle_id: str,
    service: VehicleService = Depends(get_vehicle_service),
    caller: Caller = Depends(_readers),
):
    """Supprimer un vehicule et ses photos / Delete a vehicle and its photos."""
    await service.delete(vehicle_id, scope_for(caller))
    return VehicleMessage(message="Vehicle removed", vehicle_id=vehicle_id)


@router.get("/{vehicle_id}/history", response_model=list[ServiceHistoryRecord])
async def get_service_history(
    vehicle_id: str,
    service: HistoryService = Depends(get_history_service),
    caller: Caller = Depends(_readers),
):
    """Historique d'entretien / Service history (vide pour l'instant / empty for now)."""
    return await service.get_history(vehicle_id, scope_for(caller))
