"""
Lecture scopee d'un vehicule / Scoped vehicle lookup.

Partagee par les services vehicules, photos et historique.
Shared by the vehicle, photo and history services.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_service.exceptions import VehicleNotFoundError
from vehicle_service.models.vehicle import Vehicle
from vehicle_service.services.access import Owned, Scope, scoped

logger = logging.getLogger(__name__)


def describe(scope: Scope) -> str:
    return scope.customer_id if isinstance(scope, Owned) else "privileged"


async def find_vehicle(db: AsyncSession, vehicle_id: str, scope: Scope) -> Vehicle:
    """Charger un vehicule visible pour la portee / Load a vehicle visible to the scope.

    Mauvais proprietaire et ID inexistant donnent la meme erreur.
    Wrong owner and unknown ID raise the same error.
    """
    query = scoped(select(Vehicle).where(Vehicle.id == vehicle_id), Vehicle, scope)
    vehicle = (await db.execute(query)).scalar_one_or_none()
    if vehicle is None:
        logger.info("Vehicle %s not visible to %s", vehicle_id, describe(scope))
        raise VehicleNotFoundError(vehicle_id)
    return vehicle
