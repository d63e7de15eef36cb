import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from cihub.domain.estimationRequest import EstimationRequest
from cihub.domain.estimationResponse import EstimationResponse


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: int  # epoch milliseconds
    region: str
    input: EstimationRequest
    data: EstimationResponse
    score: float = 0
    cost_per_1k: float = 0

    @classmethod
    def record(
            cls,
            request: EstimationRequest,
            response: EstimationResponse,
            timestamp: Optional[int] = None,
    ) -> "HistoryEntry":
        if timestamp is None:
            timestamp = int(time.time() * 1000)
        return cls(
            timestamp=timestamp,
            region=request.region,
            input=request,
            data=response,
            score=response.risk_score or 0,
            cost_per_1k=response.per_1k_requests.cost_usd or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ts": self.timestamp,
            "region": self.region,
            "input": self.input.to_payload(),
            "data": self.data.to_dict(),
            "score": self.score,
            "costPer1k": self.cost_per_1k,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            timestamp=int(data["ts"]),
            region=str(data["region"]),
            input=EstimationRequest.from_dict(data["input"]),
            data=EstimationResponse.from_dict(data["data"]),
            score=_stored_number(data.get("score", 0)),
            cost_per_1k=_stored_number(data.get("costPer1k", 0)),
        )


def _stored_number(value: Any):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {value!r}")
    return value
