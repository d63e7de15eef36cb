import logging
from typing import Any, Mapping, Optional, Tuple

from cihub.core.estimation_client import EstimationClient, EstimatorApi
from cihub.core.history_cache import HistoryCache
from cihub.core.restore_controller import RestoreController
from cihub.domain.estimationRequest import EstimationRequest
from cihub.domain.estimationResponse import EstimationResponse
from cihub.domain.estimationResult import EstimationResult
from cihub.domain.historyEntry import HistoryEntry
from cihub.domain.key_value_store import KeyValueStore
from cihub.domain.request_builder import default_request, normalize
from cihub.core.session_state import SessionState

logger = logging.getLogger(__name__)


class SessionController:
    """Owns the session state and hands it to the estimate and restore paths."""

    def __init__(self, api: EstimatorApi, store: KeyValueStore, history_key: Optional[str] = None) -> None:
        history = HistoryCache(store, key=history_key) if history_key else HistoryCache(store)
        history.load()

        self.state = SessionState(form=default_request(), history=history)
        self.client = EstimationClient(api, self.state)
        self.restorer = RestoreController(self.state, self.client.next_generation)

    @property
    def form(self) -> EstimationRequest:
        return self.state.form

    @property
    def result(self) -> Optional[EstimationResponse]:
        return self.state.result

    @property
    def loading(self) -> bool:
        return self.state.loading

    def history(self) -> Tuple[HistoryEntry, ...]:
        return self.state.history.restore_all()

    async def submit(self, raw_fields: Mapping[str, Any]) -> EstimationResult:
        self.state.form = normalize(raw_fields)
        return await self.client.estimate(self.state.form)

    def restore(self, index: int) -> Tuple[EstimationRequest, EstimationResponse]:
        entry = self.state.history[index]
        logger.info(f"Restoring run from ts={entry.timestamp} ({entry.region})")
        return self.restorer.restore(entry)
