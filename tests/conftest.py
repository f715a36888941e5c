"""Fixtures de test / Test fixtures.

Base SQLite temporaire et dossier photos temporaire ; les variables
d'environnement sont posees avant l'import de l'application.
"""

import os
import random
import tempfile

_TMP = tempfile.mkdtemp(prefix="vehicle-service-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["DEBUG"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from vehicle_service.database import Base, async_session, engine, init_db  # noqa: E402
from vehicle_service.main import app  # noqa: E402
from vehicle_service.services.id_generator import IdGenerator, get_id_generator  # noqa: E402
from vehicle_service.services.photo_service import PhotoService  # noqa: E402
from vehicle_service.services.photo_storage import PhotoStorage, get_photo_storage  # noqa: E402
from vehicle_service.services.vehicle_service import VehicleService  # noqa: E402

CUSTOMER_A = {"X-User-Subject": "alice", "X-User-Roles": "CUSTOMER"}
CUSTOMER_B = {"X-User-Subject": "bob", "X-User-Roles": "CUSTOMER"}
ADMIN = {"X-User-Subject": "root", "X-User-Roles": "ADMIN"}
EMPLOYEE = {"X-User-Subject": "staff", "X-User-Roles": "EMPLOYEE"}

CAMRY = {
    "make": "Toyota",
    "model": "Camry",
    "year": 2022,
    "vin": "1HGBH41JXMN109186",
    "licensePlate": "ABC123",
    "color": "Silver",
    "mileage": 15000,
}


@pytest.fixture
async def database():
    """Tables creees puis supprimees pour chaque test / Fresh tables per test."""
    await init_db()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Une boucle d'evenements par test / One event loop per test
    await engine.dispose()


@pytest.fixture
async def db_session(database):
    async with async_session() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    store = PhotoStorage(tmp_path / "photos")
    store.ensure_root()
    return store


@pytest.fixture
def ids():
    return IdGenerator(random.Random(1234))


@pytest.fixture
def photo_service(db_session, storage, ids):
    return PhotoService(db_session, storage, ids)


@pytest.fixture
def vehicle_service(db_session, ids, photo_service):
    return VehicleService(db_session, ids, photo_service)


@pytest.fixture
async def client(database, storage, ids):
    app.dependency_overrides[get_photo_storage] = lambda: storage
    app.dependency_overrides[get_id_generator] = lambda: ids
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
