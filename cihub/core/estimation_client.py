import asyncio
import itertools
import logging
from typing import Any, Dict, Protocol

from cihub.domain.errors import ResponseParseError, TransportError
from cihub.domain.estimationRequest import EstimationRequest
from cihub.domain.estimationResponse import EstimationResponse
from cihub.domain.estimationResult import EstimationResult, Outcome
from cihub.domain.historyEntry import HistoryEntry
from cihub.core.session_state import SessionState

logger = logging.getLogger(__name__)


class EstimatorApi(Protocol):
    def post_estimate(self, payload: Dict[str, Any]) -> Dict[str, Any]: ...


class EstimationClient:
    """
    Runs estimate exchanges and publishes their outcome into the session.

    Calls may overlap. Each call takes the next generation number, and the
    session's active result only moves forward: a call that finishes after a
    newer one keeps its result to itself (and in history) without replacing
    what is shown. There is no cancellation.
    """

    def __init__(self, api: EstimatorApi, state: SessionState) -> None:
        self.api = api
        self.state = state
        self._generations = itertools.count(1)
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self.state.loading

    def next_generation(self) -> int:
        return next(self._generations)

    async def estimate(self, request: EstimationRequest) -> EstimationResult:
        generation = self.next_generation()
        self._in_flight += 1
        self.state.loading = True
        try:
            result = await self._exchange(request, generation)
        finally:
            self._in_flight -= 1
            self.state.loading = self._in_flight > 0

        self._publish(result)
        return result

    async def _exchange(self, request: EstimationRequest, generation: int) -> EstimationResult:
        logger.info(f"[gen {generation}] Requesting estimate for region={request.region}")
        try:
            body = await asyncio.to_thread(self.api.post_estimate, request.to_payload())
        except TransportError as e:
            logger.warning(f"[gen {generation}] Transport failure: {e}")
            return EstimationResult(Outcome.TRANSPORT_FAILURE, EstimationResponse.failure(str(e)), generation)
        except ResponseParseError as e:
            logger.warning(f"[gen {generation}] Unreadable response: {e}")
            return EstimationResult(Outcome.PARSE_FAILURE, EstimationResponse.failure(str(e)), generation)

        try:
            response = EstimationResponse.from_dict(body)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"[gen {generation}] Malformed response body: {e}")
            return EstimationResult(Outcome.PARSE_FAILURE, EstimationResponse.failure(str(e)), generation)

        # only completed exchanges reach history, service errors included
        entry = HistoryEntry.record(request, response)
        self.state.history.append(entry)

        outcome = Outcome.SERVICE_ERROR if response.is_error else Outcome.SUCCESS
        logger.info(f"[gen {generation}] {outcome.value}: risk_score={response.risk_score}")
        return EstimationResult(outcome, response, generation, entry)

    def _publish(self, result: EstimationResult) -> None:
        if result.generation < self.state.result_generation:
            logger.info(
                f"[gen {result.generation}] Stale result not shown "
                f"(showing gen {self.state.result_generation})"
            )
            return
        self.state.result = result.response
        self.state.result_generation = result.generation
