from dataclasses import dataclass
from typing import Optional

from cihub.core.history_cache import HistoryCache
from cihub.domain.estimationRequest import EstimationRequest
from cihub.domain.estimationResponse import EstimationResponse


@dataclass
class SessionState:
    form: EstimationRequest
    history: HistoryCache
    result: Optional[EstimationResponse] = None
    loading: bool = False
    result_generation: int = 0
