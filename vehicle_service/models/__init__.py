"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que create_all les détecte.
Import all models here so create_all can detect them.
"""

from vehicle_service.models.vehicle import Vehicle
from vehicle_service.models.vehicle_photo import VehiclePhoto

__all__ = [
    "Vehicle",
    "VehiclePhoto",
]
