from typing import Optional

import uvicorn
from fastapi import FastAPI

from src.application.repositories import AbstractKeyValueStore
from src.application.services.slot_registry import SlotRegistry
from src.api.routers.parking import router
from src.config.settings_env import Settings, settings
from src.infrastructure.persistence.database import make_engine, make_session_factory, init_db
from src.infrastructure.persistence.sqlalchemy_repositories import SQLAlchemyKeyValueStore, SnapshotSlotRepository
from src.shared.clock import AbstractClock
from src.shared.utils import logger


def create_app(
    app_settings: Settings = settings,
    store: Optional[AbstractKeyValueStore] = None,
    clock: Optional[AbstractClock] = None,
) -> FastAPI:
    """Build the API with its own registry; nothing is shared between apps."""
    if store is None:
        engine = make_engine(app_settings.DATABASE_URL)
        init_db(engine)
        store = SQLAlchemyKeyValueStore(make_session_factory(engine))

    slot_repo = SnapshotSlotRepository(store, app_settings.STORAGE_KEY)

    app = FastAPI(
        title="Parking Slot Registry",
        description="Select, book and vacate parking slots",
        version="1.0.0",
    )
    app.state.registry = SlotRegistry(slot_repo, clock=clock, total_slots=app_settings.TOTAL_SLOTS)
    app.include_router(router)
    return app


def main():
    logger.info(f"Parking Slot Registry ready on http://{settings.FASTAPI_HOST}:{settings.FASTAPI_PORT}")
    uvicorn.run(create_app(), host=settings.FASTAPI_HOST, port=settings.FASTAPI_PORT)


if __name__ == "__main__":
    main()
