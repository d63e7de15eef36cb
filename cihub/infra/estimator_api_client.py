from __future__ import annotations

import logging
from typing import Any, Final

import requests

from cihub.domain.errors import ResponseParseError, TransportError

logger = logging.getLogger(__name__)


class EstimatorApiClient:
    _ESTIMATE_PATH: Final[str] = "/api/estimate"
    _HEALTH_PATH: Final[str] = "/healthz"

    def __init__(
            self,
            base_url: str,
            timeout: float = 10.0,
            estimate_path: str = _ESTIMATE_PATH,
            health_path: str = _HEALTH_PATH,
    ) -> None:
        self.base = base_url.rstrip("/")
        self.timeout = timeout
        self.estimate_path = estimate_path
        self.health_path = health_path

    def post_estimate(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        POST one estimate request and return the decoded JSON object.

        Status codes are not inspected: the service reports its own errors
        in the body as ``{"error": "..."}``.
        """
        url = f"{self.base}{self.estimate_path}"
        try:
            r = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Failed to reach estimator at {url}: {exc}") from exc

        try:
            data = r.json()
        except ValueError as exc:
            raise ResponseParseError(
                f"Estimator returned a non-JSON body (HTTP {r.status_code}): {r.text[:200]!r}"
            ) from exc

        if not isinstance(data, dict):
            raise ResponseParseError(f"Estimator returned {type(data).__name__}, expected an object")

        logger.info(f"Estimator answered HTTP {r.status_code} for region={payload.get('region')}")
        return data

    def check_health(self) -> bool:
        try:
            r = requests.get(f"{self.base}{self.health_path}", timeout=self.timeout)
            return r.status_code == 200
        except requests.RequestException as e:
            logger.warning(f"Health check failed: {e}")
            return False
