import time
from dataclasses import replace
from typing import Any, Dict, List, Optional

from cihub.domain.errors import PersistenceError
from cihub.domain.estimationResponse import EstimationResponse
from cihub.domain.historyEntry import HistoryEntry
from cihub.domain.key_value_store import KeyValueStore
from cihub.domain.request_builder import default_request

SUCCESS_BODY = {
    "risk_score": 95,
    "per_1k_requests": {"cost_usd": 0.01, "co2_g": 2},
    "monthly_forecast": {"cost_usd": 4.32, "co2_kg": 0.9},
    "suggested_yaml": "...",
    "advice": ["ok"],
}


def success_body(score: float = 95, cost: float = 0.01) -> Dict[str, Any]:
    body = dict(SUCCESS_BODY)
    body["risk_score"] = score
    body["per_1k_requests"] = {"cost_usd": cost, "co2_g": 2}
    return body


class FakeEstimatorApi:
    """Replays scripted bodies or exceptions; optional per-call delay in seconds."""

    def __init__(self, script: List[Any], delays: Optional[List[float]] = None, state=None) -> None:
        self.script = list(script)
        self.delays = list(delays or [])
        self.state = state
        self.payloads: List[Dict[str, Any]] = []
        self.loading_seen: List[bool] = []

    def post_estimate(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.payloads.append(payload)
        step = self.script.pop(0)
        delay = self.delays.pop(0) if self.delays else 0
        if self.state is not None:
            self.loading_seen.append(self.state.loading)
        if delay:
            time.sleep(delay)
        if isinstance(step, Exception):
            raise step
        return step


class FailingStore(KeyValueStore):
    def __init__(self, fail_get: bool = False, fail_set: bool = True) -> None:
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.writes = 0

    def get(self, key: str):
        if self.fail_get:
            raise PersistenceError("disk gone")
        return None

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        if self.fail_set:
            raise PersistenceError("read-only filesystem")


def make_entry(ts: int, score: float = 80, region: str = "us-central1") -> HistoryEntry:
    request = replace(default_request(), region=region, concurrency=ts % 100)
    response = EstimationResponse.from_dict(success_body(score=score, cost=0.002 * (ts % 7)))
    return HistoryEntry.record(request, response, timestamp=ts)
