from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cihub.domain.estimationResponse import EstimationResponse
from cihub.domain.historyEntry import HistoryEntry


class Outcome(Enum):
    SUCCESS = "success"
    SERVICE_ERROR = "service_error"
    TRANSPORT_FAILURE = "transport_failure"
    PARSE_FAILURE = "parse_failure"


@dataclass(frozen=True)
class EstimationResult:
    outcome: Outcome
    response: EstimationResponse
    generation: int
    entry: Optional[HistoryEntry] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def completed(self) -> bool:
        # the service answered with a readable body, error or not
        return self.outcome in (Outcome.SUCCESS, Outcome.SERVICE_ERROR)
