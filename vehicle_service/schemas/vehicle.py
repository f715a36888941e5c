"""Schémas Véhicule / Vehicle schemas.

JSON en camelCase (contrat gateway), snake_case accepte en entree.
camelCase on the wire (gateway contract), snake_case also accepted on input.
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MIN_YEAR = 1900
VIN_PATTERN = r"^[A-HJ-NPR-Z0-9]{17}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _max_year() -> int:
    # Annee suivante autorisee pour les nouveaux modeles / Next year allowed for upcoming models
    return datetime.now(timezone.utc).year + 1


def _strip_non_blank(value):
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
    return value


# Texte obligatoire, espaces retires / Required text, surrounding whitespace removed
NonBlankStr = Annotated[str, BeforeValidator(_strip_non_blank)]


class VehicleCreate(CamelModel):
    make: NonBlankStr = Field(min_length=2, max_length=50)
    model: NonBlankStr = Field(min_length=1, max_length=50)
    year: int
    vin: str = Field(pattern=VIN_PATTERN)
    license_plate: NonBlankStr = Field(min_length=2, max_length=15)
    color: str | None = Field(None, max_length=30)
    mileage: int | None = Field(None, ge=0, le=1_000_000)

    @field_validator("vin", mode="before")
    @classmethod
    def _normalize_vin(cls, value):
        """VIN en majuscules avant validation / Uppercase VIN before validation."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("year")
    @classmethod
    def _check_year(cls, value: int) -> int:
        max_year = _max_year()
        if value < MIN_YEAR or value > max_year:
            raise ValueError(f"Year must be between {MIN_YEAR} and {max_year} (current year + 1)")
        return value


class VehicleUpdate(CamelModel):
    """Mise a jour partielle : seuls les champs non nuls sont appliques / Partial update."""
    license_plate: NonBlankStr | None = Field(None, min_length=2, max_length=15)
    color: str | None = Field(None, max_length=30)
    mileage: int | None = Field(None, ge=0, le=1_000_000)


class VehicleSummary(CamelModel):
    """Ligne de liste / List item."""
    vehicle_id: str
    customer_id: str
    make: str
    model: str
    year: int
    license_plate: str
    color: str | None = None
    mileage: int


class VehicleRead(VehicleSummary):
    vin: str
    created_at: str
    updated_at: str


class VehicleMessage(CamelModel):
    """Accuse de reception / Acknowledgement body."""
    message: str
    vehicle_id: str | None = None
