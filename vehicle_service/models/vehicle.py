"""Modele Vehicule client / Customer vehicle model.

L'identifiant est genere a la creation (VEH-<annee>-<marque>-<modele>-<suffixe>).
Le VIN est la cle metier unique, le client proprietaire ne change jamais.
The ID is generated at creation time. The VIN is the unique business key and
the owning customer never changes.
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from vehicle_service.database import Base

# Champs modifiables apres creation / Fields mutable after creation
MUTABLE_FIELDS = ("color", "mileage", "license_plate")

VIN_CONSTRAINT = "uq_vehicles_vin"


class Vehicle(Base):
    """Vehicule d'un client / Customer vehicle."""
    __tablename__ = "vehicles"
    __table_args__ = (UniqueConstraint("vin", name=VIN_CONSTRAINT),)

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # --- Identification ---
    make: Mapped[str] = mapped_column(String(50), nullable=False)
    model: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    vin: Mapped[str] = mapped_column(String(17), nullable=False)

    # --- Modifiables / Mutable ---
    license_plate: Mapped[str] = mapped_column(String(15), nullable=False)
    color: Mapped[str | None] = mapped_column(String(30))
    mileage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # --- Horodatage / Timestamps ---
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601

    @validates("customer_id")
    def _freeze_customer_id(self, key, value):
        if self.customer_id is not None and value != self.customer_id:
            raise ValueError("customer_id is immutable once set")
        return value

    def __repr__(self) -> str:
        return f"<Vehicle {self.id} - {self.vin}>"
