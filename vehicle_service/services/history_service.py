"""
Historique d'entretien / Service history.

Point d'accroche du futur appel au service de maintenance : pour l'instant,
controle de propriete puis liste vide.
Seam for the future call to the maintenance service: ownership check, then
an empty list for now.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_service.schemas.history import ServiceHistoryRecord
from vehicle_service.services.access import Scope
from vehicle_service.services.vehicle_lookup import describe, find_vehicle

logger = logging.getLogger(__name__)


class HistoryService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_history(self, vehicle_id: str, scope: Scope) -> list[ServiceHistoryRecord]:
        logger.info("Fetching service history for vehicle %s (%s)", vehicle_id, describe(scope))
        await find_vehicle(self.db, vehicle_id, scope)
        logger.info("Returning empty service history, maintenance service not connected yet")
        return []
