"""Tests stockage photos / Photo storage tests."""

import pytest

from vehicle_service.exceptions import InvalidPhotoPathError
from vehicle_service.services.photo_storage import PhotoStorage


@pytest.fixture
def store(tmp_path):
    return PhotoStorage(tmp_path / "photos")


def test_resolve_inside_vehicle_dir(store):
    path = store.resolve("VEH-1", "VEH-1_abc.jpg")
    assert path == store.root / "VEH-1" / "VEH-1_abc.jpg"


@pytest.mark.parametrize("name", ["", ".", "..", "../x.jpg", "../../etc/passwd", "sub/x.jpg", "/etc/passwd"])
def test_resolve_rejects_escapes(store, name):
    with pytest.raises(InvalidPhotoPathError):
        store.resolve("VEH-1", name)


def test_resolve_does_not_touch_disk(store):
    store.resolve("VEH-1", "x.jpg")
    assert not store.root.exists()


def test_is_within(store):
    assert store.is_within("VEH-1", store.root / "VEH-1" / "a.jpg")
    assert store.is_within("VEH-1", f"{store.root}/VEH-1/sub/../a.jpg")
    assert not store.is_within("VEH-1", store.root / "VEH-2" / "a.jpg")
    assert not store.is_within("VEH-1", store.root / "VEH-1")


def test_write_and_delete(store):
    path = store.write("VEH-1", "a.jpg", b"bytes")
    assert path.read_bytes() == b"bytes"
    assert [p.name for p in path.parent.iterdir()] == ["a.jpg"]

    assert store.delete(path) is True
    assert store.delete(path) is False


def test_write_rejects_traversal(store):
    with pytest.raises(InvalidPhotoPathError):
        store.write("VEH-1", "../evil.jpg", b"x")
    assert not (store.root / "evil.jpg").exists()
