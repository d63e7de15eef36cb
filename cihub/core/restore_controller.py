from typing import Callable, Tuple

from cihub.domain.estimationRequest import EstimationRequest
from cihub.domain.estimationResponse import EstimationResponse
from cihub.domain.historyEntry import HistoryEntry
from cihub.core.session_state import SessionState


class RestoreController:
    def __init__(self, state: SessionState, next_generation: Callable[[], int]) -> None:
        self.state = state
        self._next_generation = next_generation

    def restore(self, entry: HistoryEntry) -> Tuple[EstimationRequest, EstimationResponse]:
        """
        Put a past run back on screen: its inputs into the form, its response
        into the result. Offline, and history is left untouched.
        """
        self.state.form = entry.input
        self.state.result = entry.data
        self.state.result_generation = self._next_generation()
        return entry.input, entry.data
