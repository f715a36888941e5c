"""Tests des modèles et schémas / Model and schema tests."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from vehicle_service.models.vehicle import MUTABLE_FIELDS, Vehicle
from vehicle_service.models.vehicle_photo import VehiclePhoto
from vehicle_service.schemas.photo import VehiclePhotoRead
from vehicle_service.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate


def _payload(**overrides):
    data = {
        "make": "Toyota", "model": "Camry", "year": 2022, "vin": "1HGBH41JXMN109186",
        "licensePlate": "ABC123",
    }
    data.update(overrides)
    return data


def test_vehicle_repr():
    v = Vehicle(id="VEH-2022-TOYOTA-CAMRY-AB12", customer_id="alice", vin="1HGBH41JXMN109186")
    assert "VEH-2022-TOYOTA-CAMRY-AB12" in repr(v)


def test_customer_id_is_immutable():
    v = Vehicle(id="VEH-1", customer_id="alice")
    v.customer_id = "alice"
    with pytest.raises(ValueError):
        v.customer_id = "bob"


def test_mutable_fields():
    assert set(MUTABLE_FIELDS) == {"color", "mileage", "license_plate"}


def test_create_trims_and_uppercases():
    data = VehicleCreate(**_payload(make="  Toyota ", vin=" 1hgbh41jxmn109186 "))
    assert data.make == "Toyota"
    assert data.vin == "1HGBH41JXMN109186"
    assert data.mileage is None


@pytest.mark.parametrize("field,value", [
    ("make", "T"),
    ("make", "   "),
    ("model", ""),
    ("licensePlate", "A"),
    ("licensePlate", "X" * 16),
    ("vin", "1HGBH41JXMN10918"),
    ("vin", "1HGBH41JXMN10918Q"),
    ("color", "C" * 31),
    ("mileage", -5),
    ("mileage", 1_000_001),
    ("year", 1899),
])
def test_create_rejects_invalid_values(field, value):
    with pytest.raises(ValidationError):
        VehicleCreate(**_payload(**{field: value}))


def test_year_bounds_follow_calendar():
    next_year = datetime.now(timezone.utc).year + 1
    assert VehicleCreate(**_payload(year=next_year)).year == next_year
    assert VehicleCreate(**_payload(year=1900)).year == 1900
    with pytest.raises(ValidationError, match="current year"):
        VehicleCreate(**_payload(year=next_year + 1))


def test_read_schema_serializes_camel_case():
    read = VehicleRead(
        vehicle_id="VEH-1", customer_id="alice", make="Toyota", model="Camry", year=2022,
        license_plate="ABC123", color=None, mileage=0, vin="1HGBH41JXMN109186",
        created_at="2024-01-01T00:00:00+00:00", updated_at="2024-01-01T00:00:00+00:00",
    )
    dumped = read.model_dump(by_alias=True)
    assert dumped["vehicleId"] == "VEH-1"
    assert dumped["licensePlate"] == "ABC123"
    assert "createdAt" in dumped


def test_photo_read_hides_disk_path():
    photo = VehiclePhoto(
        id="p1", vehicle_id="VEH-1", file_name="VEH-1_ab.jpg", file_path="/srv/uploads/VEH-1/VEH-1_ab.jpg",
        file_url="/api/v1/vehicles/VEH-1/photos/VEH-1_ab.jpg", file_size=3,
        content_type="image/jpeg", uploaded_at="2024-01-01T00:00:00+00:00",
    )
    dumped = VehiclePhotoRead.model_validate(photo).model_dump(by_alias=True)
    assert dumped["fileName"] == "VEH-1_ab.jpg"
    assert "filePath" not in dumped
    assert "file_path" not in dumped


def test_update_trims_license_plate():
    assert VehicleUpdate(licensePlate="  XY-12 ").license_plate == "XY-12"
    assert VehicleUpdate().license_plate is None


@pytest.mark.parametrize("value", ["", "   ", " A "])
def test_update_rejects_blank_license_plate(value):
    with pytest.raises(ValidationError):
        VehicleUpdate(licensePlate=value)
