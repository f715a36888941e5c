"""
Seed des vehicules de demo / Demo vehicle seeding.
Cree quelques vehicules fixes au demarrage (dev uniquement, SEED_DEMO_DATA=true).
Creates a few fixed vehicles on startup (dev only, SEED_DEMO_DATA=true).
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_service.models.vehicle import Vehicle
from vehicle_service.services.id_generator import get_id_generator
from vehicle_service.services.photo_service import PhotoService
from vehicle_service.services.photo_storage import get_photo_storage
from vehicle_service.services.vehicle_service import VehicleService

logger = logging.getLogger(__name__)

DEMO_CUSTOMERS = ("customer", "testuser", "demo")

# (id, client, marque, modele, annee, VIN, immatriculation, couleur, km)
DEMO_VEHICLES = [
    ("VEH-2022-TOYOTA-CAMRY-0001", "customer", "Toyota", "Camry", 2022,
     "4T1B11HK5NU123456", "ABC-1234", "Silver", 15000),
    ("VEH-2021-HONDA-ACCORD-0002", "customer", "Honda", "Accord", 2021,
     "1HGCV1F36LA123789", "XYZ-5678", "Black", 28000),
    ("VEH-2023-BMW-X5-0003", "testuser", "BMW", "X5", 2023,
     "5UXCR6C53N9A12345", "BMW-2023", "White", 8500),
    ("VEH-2020-MERCEDESBENZ-C300-0004", "testuser", "Mercedes-Benz", "C 300", 2020,
     "55SWF4KB7LU123456", "MERC-300", "Blue", 42000),
    ("VEH-2022-NISSAN-ALTIMA-0005", "demo", "Nissan", "Altima", 2022,
     "1N4BL4BV5NC123456", "NIS-2022", "Red", 18500),
    ("VEH-2019-MAZDA-CX5-0006", "demo", "Mazda", "CX-5", 2019,
     "JM3KFBCM5K0123456", "MAZ-CX5", "Gray", 55000),
]


async def seed_demo_vehicles(session: AsyncSession) -> int:
    """Inserer les vehicules de demo si absents / Insert demo vehicles if missing.

    Retourne le nombre de vehicules crees / Returns the number of vehicles created.
    """
    if await session.get(Vehicle, DEMO_VEHICLES[0][0]) is not None:
        logger.info("Demo vehicles already present, seed skipped")
        return 0

    now = datetime.now(timezone.utc).isoformat(timespec="seconds")
    for vehicle_id, customer_id, make, model, year, vin, plate, color, mileage in DEMO_VEHICLES:
        session.add(Vehicle(
            id=vehicle_id,
            customer_id=customer_id,
            make=make,
            model=model,
            year=year,
            vin=vin,
            license_plate=plate,
            color=color,
            mileage=mileage,
            created_at=now,
            updated_at=now,
        ))
    await session.commit()

    ids = get_id_generator()
    service = VehicleService(session, ids, PhotoService(session, get_photo_storage(), ids))
    for customer_id in DEMO_CUSTOMERS:
        count = await service.count_for_customer(customer_id)
        logger.info("Demo data: customer %s has %d vehicle(s)", customer_id, count,
                    extra={"customer_id": customer_id})
    logger.info("Seeded %d demo vehicles", len(DEMO_VEHICLES))
    return len(DEMO_VEHICLES)
