import json
import logging
from typing import Iterator, List, Tuple

from cihub.domain.errors import PersistenceError
from cihub.domain.historyEntry import HistoryEntry
from cihub.domain.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "cihub_history_v1"
HISTORY_CAPACITY = 10


class HistoryCache:
    """
    Newest-first list of completed estimates, at most HISTORY_CAPACITY long.

    The whole list is rewritten to the store on every append. Store failures
    are logged and dropped; the in-memory list stays authoritative for the
    rest of the session.
    """

    def __init__(self, store: KeyValueStore, key: str = HISTORY_KEY, capacity: int = HISTORY_CAPACITY) -> None:
        self.store = store
        self.key = key
        self.capacity = capacity
        self._entries: List[HistoryEntry] = []

    def load(self) -> None:
        try:
            raw = self.store.get(self.key)
        except (PersistenceError, OSError) as e:
            logger.warning(f"History unavailable, starting empty: {e}")
            self._entries = []
            return

        if raw is None:
            self._entries = []
            return

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            entries = [HistoryEntry.from_dict(item) for item in data]
        except (ValueError, TypeError, KeyError, AttributeError, RecursionError) as e:
            logger.warning(f"Discarding corrupt history under '{self.key}': {e}")
            self._entries = []
            return

        self._entries = entries[:self.capacity]
        logger.info(f"Loaded {len(self._entries)} history entries")

    def append(self, entry: HistoryEntry) -> None:
        self._entries = [entry, *self._entries][:self.capacity]
        self._persist()

    def restore_all(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def _persist(self) -> None:
        try:
            blob = json.dumps([e.to_dict() for e in self._entries])
            self.store.set(self.key, blob)
        except (PersistenceError, OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not persist history ({len(self._entries)} entries kept in memory): {e}")

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))
