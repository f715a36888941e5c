"""Tests generation d'identifiants / Identifier generation tests."""

import random
import re
import uuid

from vehicle_service.services.id_generator import IdGenerator


def test_sanitize():
    assert IdGenerator.sanitize("Mercedes-Benz") == "MERCEDESBENZ"
    assert IdGenerator.sanitize("CX-5 ") == "CX5"
    assert IdGenerator.sanitize("C 300") == "C300"


def test_vehicle_id_format():
    vehicle_id = IdGenerator(random.Random(7)).vehicle_id("Toyota", "Camry", 2022)
    assert re.fullmatch(r"VEH-2022-TOYOTA-CAMRY-[A-Z0-9]{4}", vehicle_id)


def test_seeded_generators_are_reproducible():
    a, b = IdGenerator(random.Random(42)), IdGenerator(random.Random(42))
    assert a.vehicle_id("Honda", "Accord", 2021) == b.vehicle_id("Honda", "Accord", 2021)
    assert a.photo_id() == b.photo_id()


def test_photo_id_is_uuid4():
    photo_id = IdGenerator(random.Random(3)).photo_id()
    assert uuid.UUID(photo_id).version == 4


def test_photo_file_name_keeps_safe_extension():
    ids = IdGenerator(random.Random(1))
    name = ids.photo_file_name("VEH-1", "Front.PNG")
    assert re.fullmatch(r"VEH-1_[0-9a-f]{32}\.png", name)
    assert ids.photo_file_name("VEH-1", "archive.tar.gz").endswith(".gz")


def test_photo_file_name_falls_back_to_jpg():
    ids = IdGenerator(random.Random(1))
    for original in (None, "", "noext", "../../etc/passwd", "x.../..", "a.jp g", "evil.verylongextension"):
        name = ids.photo_file_name("VEH-1", original)
        assert name.endswith(".jpg"), original
        assert "/" not in name and ".." not in name
