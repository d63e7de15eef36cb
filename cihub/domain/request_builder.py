import math
import re
from typing import Any, Dict, Mapping

from cihub.domain.estimationRequest import EstimationRequest

DEFAULT_FORM: Dict[str, Any] = {
    "vcpu": 1,
    "memory_gb": 1,
    "concurrency": 80,
    "avg_duration_ms": 200,
    "requests_per_min": 600,
    "region": "asia-south1",
    "min_instances": 0,
    "max_instances": 5,
    "idle_utilization_pc": 10,
}

FLOAT_FIELDS = ("vcpu", "memory_gb", "idle_utilization_pc")
INT_FIELDS = ("concurrency", "avg_duration_ms", "requests_per_min", "min_instances", "max_instances")

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))")


def parse_float(raw: Any) -> float:
    """
    Leading-prefix decimal parse: "1.5Gi" -> 1.5, "abc" -> nan.
    Never raises.
    """
    if isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    if not isinstance(raw, str):
        return math.nan
    match = _FLOAT_PREFIX.match(raw)
    if not match:
        return math.nan
    return float(match.group(1).replace("Infinity", "inf"))


def parse_int(raw: Any):
    """
    Leading-prefix integer parse: "12.7" -> 12, "80abc" -> 80.
    Returns nan (a float) when no digits lead the text.
    """
    if isinstance(raw, bool):
        return math.nan
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else math.nan
    if not isinstance(raw, str):
        return math.nan
    match = _INT_PREFIX.match(raw)
    if not match:
        return math.nan
    return int(match.group(1))


def normalize(raw_fields: Mapping[str, Any]) -> EstimationRequest:
    fields = {**DEFAULT_FORM, **raw_fields}
    values: Dict[str, Any] = {name: parse_float(fields[name]) for name in FLOAT_FIELDS}
    values.update({name: parse_int(fields[name]) for name in INT_FIELDS})
    values["region"] = str(fields["region"]).strip() if fields["region"] is not None else ""
    return EstimationRequest(**values)


def default_request() -> EstimationRequest:
    return normalize(DEFAULT_FORM)
