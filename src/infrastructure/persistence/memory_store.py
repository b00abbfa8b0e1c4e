from typing import Dict, Optional

from src.application.repositories import AbstractKeyValueStore


class InMemoryKeyValueStore(AbstractKeyValueStore):
    """Process-local store; state is lost when the process ends."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)
