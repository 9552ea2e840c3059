"""Bounded polling for a meal plan that may not be ready yet.

The generation backend is slow and sometimes answers with an all-empty
plan. RetryPoller keeps asking until all three primary meals are filled
in, or the retry budget runs out:

    IDLE -> POLLING -> RESOLVED | EXHAUSTED   (or CANCELLED)

At most one run is active per key (normally the user id). A second call for
the same key while a run is in flight returns None straight away instead of
starting a duplicate run.
"""
import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional, Union

import httpx

from mealplan.client.plan_client import PlanAPIClient
from mealplan.domain.PlanResponse import PlanResponse
from mealplan.utilities.config import RETRY_DELAY_SECONDS, RETRY_MAX_ATTEMPTS, Settings
from mealplan.utilities.errors import PlanRequestError, PollingCancelledError, RetryBudgetExhaustedError
from mealplan.utilities.validators import require_user_id

logger = logging.getLogger(__name__)

FetchPlan = Callable[[str], Awaitable[PlanResponse]]
RetryObserver = Callable[[int], Union[None, Awaitable[None]]]

# answers that will not change on retry: bad request, unknown user
NON_RETRYABLE_STATUS_CODES = (400, 404)


class PollerState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    RESOLVED = "resolved"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"


def is_plan_empty(plan: Optional[PlanResponse]) -> bool:
    """True when any primary meal lacks a name, a restaurant or calories."""
    if plan is None:
        return True
    return any(meal.is_empty() for meal in plan.primary_meals())


class CancellationToken:
    """Set once to stop a run; wakes up a pending inter-attempt wait."""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self, seconds: float) -> bool:
        """Sleep up to `seconds`; returns True if cancelled meanwhile."""
        if self.cancelled or seconds <= 0:
            return self.cancelled
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True


@dataclass
class PollingRun:
    key: str
    token: CancellationToken = field(default_factory=CancellationToken)
    attempts: int = 0
    state: PollerState = PollerState.POLLING


class RetryPoller:
    def __init__(self, fetch_plan: FetchPlan, max_attempts: int = RETRY_MAX_ATTEMPTS,
                 delay_seconds: float = RETRY_DELAY_SECONDS):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.fetch_plan = fetch_plan
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self._runs: Dict[str, PollingRun] = {}
        self._last_state: Dict[str, PollerState] = {}

    def is_polling(self, key: str) -> bool:
        return key in self._runs

    def state_of(self, key: str) -> PollerState:
        run = self._runs.get(key)
        if run is not None:
            return run.state
        return self._last_state.get(key, PollerState.IDLE)

    def cancel(self, key: str) -> bool:
        """Stop the active run for key; returns False when nothing was running."""
        run = self._runs.get(key)
        if run is None:
            return False
        logger.info(f"Cancelling meal plan polling for {key} after {run.attempts} attempts")
        run.token.cancel()
        return True

    def cancel_all(self) -> None:
        for key in list(self._runs):
            self.cancel(key)

    async def get_plan_with_retry(self, user_id: str, on_retry: Optional[RetryObserver] = None,
                                  key: Optional[str] = None) -> Optional[PlanResponse]:
        """Poll until a complete plan arrives.

        Returns the plan, or None when a run for the same key is already in
        flight. Raises RetryBudgetExhaustedError after max_attempts empty or
        failed attempts, and PollingCancelledError after cancel(key). A blank
        user id raises InvalidRequestError before any request is made, and a
        400 or 404 answer is raised as PlanRequestError without retrying.
        """
        user_id = require_user_id(user_id)
        key = key or user_id
        if key in self._runs:
            logger.info(f"Meal plan polling already in progress for {key}; ignoring duplicate request")
            return None

        run = PollingRun(key)
        self._runs[key] = run
        try:
            return await self._poll(run, user_id, on_retry)
        except asyncio.CancelledError:
            run.state = PollerState.CANCELLED
            raise
        finally:
            # a run that died on an unexpected error is back to idle
            self._last_state[key] = PollerState.IDLE if run.state == PollerState.POLLING else run.state
            if self._runs.get(key) is run:
                del self._runs[key]

    async def _poll(self, run: PollingRun, user_id: str, on_retry: Optional[RetryObserver]) -> PlanResponse:
        while True:
            if run.token.cancelled:
                run.state = PollerState.CANCELLED
                raise PollingCancelledError(run.key, run.attempts)

            plan = None
            try:
                plan = await self.fetch_plan(user_id)
            except Exception as e:
                if isinstance(e, PlanRequestError) and e.status_code in NON_RETRYABLE_STATUS_CODES:
                    logger.error(f"Meal plan request for {run.key} rejected: {e}")
                    raise
                logger.warning(f"Meal plan attempt {run.attempts + 1} for {run.key} failed: {e}")

            if run.token.cancelled:
                run.state = PollerState.CANCELLED
                raise PollingCancelledError(run.key, run.attempts)

            if not is_plan_empty(plan):
                run.state = PollerState.RESOLVED
                logger.info(f"Meal plan for {run.key} ready after {run.attempts + 1} attempts")
                return plan

            run.attempts += 1
            logger.info(f"Meal plan for {run.key} not ready (attempt {run.attempts}/{self.max_attempts})")
            if on_retry is not None:
                result = on_retry(run.attempts)
                if inspect.isawaitable(result):
                    await result

            if run.attempts >= self.max_attempts:
                run.state = PollerState.EXHAUSTED
                raise RetryBudgetExhaustedError(run.attempts)

            if await run.token.wait(self.delay_seconds):
                run.state = PollerState.CANCELLED
                raise PollingCancelledError(run.key, run.attempts)


def create_retry_poller(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> RetryPoller:
    """Poller wired to the GetPlan HTTP endpoint described by settings."""
    client = PlanAPIClient(settings.plan_api_base_url, settings.plan_api_timeout, transport=transport)
    return RetryPoller(client.get_plan, settings.retry_max_attempts, settings.retry_delay_seconds)
