from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PerThousandRequests:
    cost_usd: float = 0.0
    co2_g: float = 0.0
    energy_kwh: float = 0.0


@dataclass(frozen=True)
class PerHour:
    cost_usd: float = 0.0
    co2_g: float = 0.0
    energy_kwh: float = 0.0


@dataclass(frozen=True)
class MonthlyForecast:
    cost_usd: float = 0.0
    co2_kg: float = 0.0
    requests: int = 0
    energy_kwh: float = 0.0
    assumption: str = ""


@dataclass(frozen=True)
class EstimationResponse:
    """
    Output of the remote estimator.

    Success and failure share this one type: a failed exchange, or a body
    of the form ``{"error": "..."}``, is represented by ``error`` being set
    and every other field left at its default.
    """
    risk_score: float = 0
    per_1k_requests: PerThousandRequests = field(default_factory=PerThousandRequests)
    monthly_forecast: MonthlyForecast = field(default_factory=MonthlyForecast)
    per_hour: PerHour = field(default_factory=PerHour)
    suggested_yaml: str = ""
    advice: Tuple[str, ...] = ()
    assumptions: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, message: str) -> "EstimationResponse":
        return cls(error=message)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EstimationResponse":
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

        if "error" in data:
            return cls(error=str(data["error"]))

        per_1k = data.get("per_1k_requests") or {}
        monthly = data.get("monthly_forecast") or {}
        per_hour = data.get("per_hour") or {}

        return cls(
            risk_score=_number(data.get("risk_score")),
            per_1k_requests=PerThousandRequests(
                cost_usd=_number(per_1k.get("cost_usd")),
                co2_g=_number(per_1k.get("co2_g")),
                energy_kwh=_number(per_1k.get("energy_kwh")),
            ),
            monthly_forecast=MonthlyForecast(
                cost_usd=_number(monthly.get("cost_usd")),
                co2_kg=_number(monthly.get("co2_kg")),
                requests=_number(monthly.get("requests")),
                energy_kwh=_number(monthly.get("energy_kwh")),
                assumption=str(monthly.get("assumption") or ""),
            ),
            per_hour=PerHour(
                cost_usd=_number(per_hour.get("cost_usd")),
                co2_g=_number(per_hour.get("co2_g")),
                energy_kwh=_number(per_hour.get("energy_kwh")),
            ),
            suggested_yaml=str(data.get("suggested_yaml") or ""),
            advice=tuple(str(a) for a in (data.get("advice") or [])),
            assumptions=MappingProxyType(dict(data.get("assumptions") or {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.is_error:
            return {"error": self.error}
        return {
            "risk_score": self.risk_score,
            "per_1k_requests": {
                "cost_usd": self.per_1k_requests.cost_usd,
                "co2_g": self.per_1k_requests.co2_g,
                "energy_kwh": self.per_1k_requests.energy_kwh,
            },
            "monthly_forecast": {
                "cost_usd": self.monthly_forecast.cost_usd,
                "co2_kg": self.monthly_forecast.co2_kg,
                "requests": self.monthly_forecast.requests,
                "energy_kwh": self.monthly_forecast.energy_kwh,
                "assumption": self.monthly_forecast.assumption,
            },
            "per_hour": {
                "cost_usd": self.per_hour.cost_usd,
                "co2_g": self.per_hour.co2_g,
                "energy_kwh": self.per_hour.energy_kwh,
            },
            "suggested_yaml": self.suggested_yaml,
            "advice": list(self.advice),
            "assumptions": dict(self.assumptions),
        }


def _number(value: Any):
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {value!r}")
    return value
