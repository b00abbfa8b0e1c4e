from .abstract_repositories import (
    AbstractKeyValueStore,
    AbstractSlotRepository,
)

__all__ = [
    "AbstractKeyValueStore",
    "AbstractSlotRepository",
]
