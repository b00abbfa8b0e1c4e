from .sqlalchemy_repositories import (
    SQLAlchemyKeyValueStore,
    SnapshotSlotRepository,
)

__all__ = [
    "SQLAlchemyKeyValueStore",
    "SnapshotSlotRepository",
]
