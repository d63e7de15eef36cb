from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key`` or None when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the blob under ``key``. Raises PersistenceError on failure."""
