import math
from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class EstimationRequest:
    vcpu: float
    memory_gb: float
    concurrency: int
    avg_duration_ms: int
    requests_per_min: int
    region: str
    min_instances: int
    max_instances: int
    idle_utilization_pc: float

    def to_payload(self) -> Dict[str, Any]:
        # NaN and infinities are not valid JSON; they travel as null
        return {
            key: (None if isinstance(value, float) and not math.isfinite(value) else value)
            for key, value in asdict(self).items()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EstimationRequest":
        return cls(
            vcpu=_restore_number(data["vcpu"]),
            memory_gb=_restore_number(data["memory_gb"]),
            concurrency=_restore_number(data["concurrency"]),
            avg_duration_ms=_restore_number(data["avg_duration_ms"]),
            requests_per_min=_restore_number(data["requests_per_min"]),
            region=str(data["region"]),
            min_instances=_restore_number(data["min_instances"]),
            max_instances=_restore_number(data["max_instances"]),
            idle_utilization_pc=_restore_number(data["idle_utilization_pc"]),
        )


def _restore_number(value: Any):
    if value is None:
        return math.nan
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {value!r}")
    return value
