from typing import List, Optional

from loguru import logger
from pydantic import ValidationError
from sqlalchemy.orm import sessionmaker

from src.application.repositories import AbstractKeyValueStore, AbstractSlotRepository
from src.domain.entities import Slot
from src.infrastructure.persistence.models.models import KeyValueEntry
from src.infrastructure.persistence.models.records import SlotRecord, SlotSnapshot


class SQLAlchemyKeyValueStore(AbstractKeyValueStore):
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[bytes]:
        with self.session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            if entry:
                return entry.value
            return None

    def set(self, key: str, value: bytes) -> None:
        with self.session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            if entry:
                entry.value = value
            else:
                session.add(KeyValueEntry(key=key, value=value))
            session.commit()


class SnapshotSlotRepository(AbstractSlotRepository):
    """Stores every slot as one JSON array under a single key."""

    def __init__(self, store: AbstractKeyValueStore, key: str):
        self.store = store
        self.key = key

    def load(self) -> Optional[List[Slot]]:
        raw = self.store.get(self.key)
        if raw is None:
            return None
        try:
            records = SlotSnapshot.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed slot snapshot under '{self.key}': {e.error_count()} errors")
            return None

        ids = [record.id for record in records]
        if len(set(ids)) != len(ids):
            logger.warning(f"Discarding slot snapshot under '{self.key}': duplicate slot ids")
            return None
        return [record.to_slot() for record in records]

    def save(self, slots: List[Slot]) -> None:
        records = [SlotRecord.from_slot(slot) for slot in slots]
        self.store.set(self.key, SlotSnapshot.dump_json(records, by_alias=True))
        logger.trace(f"Saved {len(records)} slots under '{self.key}'")
