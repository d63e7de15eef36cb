from datetime import datetime
from typing import Any, List

from cihub.domain.estimationResponse import EstimationResponse
from cihub.domain.historyEntry import HistoryEntry

GOOD_THRESHOLD = 90
WARN_THRESHOLD = 70


def risk_tier(score: float) -> str:
    if score >= GOOD_THRESHOLD:
        return "good"
    if score >= WARN_THRESHOLD:
        return "warn"
    return "bad"


def format_money(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "-"
    return f"${value:.4f}"


def clamp_score(score: float) -> float:
    return max(0, min(100, score))


def describe_result(response: EstimationResponse) -> List[str]:
    if response.is_error:
        return [f"error: {response.error}"]

    lines = [
        f"Risk Score: {response.risk_score} ({risk_tier(response.risk_score)}, >= {GOOD_THRESHOLD} production ready)",
        f"Cost / 1k req: {format_money(response.per_1k_requests.cost_usd)}"
        f"  CO2 / 1k: {round(response.per_1k_requests.co2_g)} g",
        f"Monthly forecast: ${response.monthly_forecast.cost_usd:.2f}"
        f"  {response.monthly_forecast.co2_kg} kg CO2",
    ]
    if response.suggested_yaml:
        lines.append("Suggested Cloud Run YAML:")
        lines.extend("  " + line for line in response.suggested_yaml.splitlines())
    lines.append("Advisor notes:")
    lines.extend(f"  - {a}" for a in response.advice)
    return lines


def describe_entry(entry: HistoryEntry) -> str:
    at = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%H:%M")
    return (
        f"{clamp_score(entry.score)} [{risk_tier(entry.score)}] {entry.region} "
        f"{format_money(entry.cost_per_1k)} @ {at}"
    )
