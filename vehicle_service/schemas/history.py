"""Schémas historique d'entretien / Service history schemas."""

from datetime import datetime
from decimal import Decimal

from vehicle_service.schemas.vehicle import CamelModel


class ServiceHistoryRecord(CamelModel):
    """Intervention d'entretien (fournie par le service de maintenance) / Maintenance record."""
    service_id: str
    date: datetime
    type: str
    cost: Decimal | None = None
    description: str | None = None
