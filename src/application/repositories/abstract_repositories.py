from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Slot


class AbstractKeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        pass


class AbstractSlotRepository(ABC):
    @abstractmethod
    def load(self) -> Optional[List[Slot]]:
        """Return the persisted slots, or None when nothing usable is stored."""

    @abstractmethod
    def save(self, slots: List[Slot]) -> None:
        pass
