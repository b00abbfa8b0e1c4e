import os
import tempfile
import time
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from src.application.services.slot_registry import SlotRegistry
from src.config.settings_env import Settings
from src.domain.entities import VehicleData
from src.infrastructure.persistence.database import make_engine, make_session_factory, init_db
from src.infrastructure.persistence.memory_store import InMemoryKeyValueStore
from src.infrastructure.persistence.sqlalchemy_repositories import SQLAlchemyKeyValueStore, SnapshotSlotRepository
from src.main_backend import create_app
from src.shared.clock import AbstractClock

T0 = datetime(2026, 10, 18, 9, 0)
STORAGE_KEY = "parkingSlots"


class FixedClock(AbstractClock):
    """Clock that only moves when a test tells it to."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, delta):
        self.moment = self.moment + delta


@pytest.fixture(scope="function")
def test_db():
    """Create a test database for each test function."""
    # Create a temporary file for the test database
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp_file:
        test_db_path = tmp_file.name

    engine = make_engine(f"sqlite:///{test_db_path}")
    init_db(engine)

    yield make_session_factory(engine)

    # Cleanup
    engine.dispose()
    os.unlink(test_db_path)


@pytest.fixture
def sql_store(test_db):
    return SQLAlchemyKeyValueStore(test_db)


@pytest.fixture
def memory_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def slot_repo(memory_store):
    return SnapshotSlotRepository(memory_store, STORAGE_KEY)


@pytest.fixture
def clock():
    return FixedClock(T0)


@pytest.fixture
def registry(slot_repo, clock):
    """A three-slot registry with nothing persisted yet."""
    return SlotRegistry(slot_repo, clock=clock, total_slots=3)


@pytest.fixture
def vehicle():
    return VehicleData(
        vehicle_number="AB-123",
        owner_name="Jo",
        vehicle_type="car",
        entry_time="2026-10-18T09:00",
    )


@pytest.fixture
def test_settings():
    """Provide test settings."""
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        TOTAL_SLOTS=3,
        STORAGE_KEY=STORAGE_KEY,
    )


@pytest.fixture
def client(test_settings, memory_store, clock):
    app = create_app(test_settings, store=memory_store, clock=clock)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def new_york_time():
    """Run the test with the process local time zone set to America/New_York."""
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()
