"""HTTP client for the GetPlan endpoint, used by apps consuming the plan API."""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from mealplan.domain.PlanResponse import PlanResponse
from mealplan.utilities.config import PLAN_API_BASE_URL, PLAN_API_TIMEOUT
from mealplan.utilities.errors import PlanRequestError

logger = logging.getLogger(__name__)

GET_PLAN_ENDPOINT = "/GetPlan"
REQUIRED_KEYS = ("morn", "afternoon", "dinner", "Alt")


class PlanAPIClient:
    def __init__(self, base_url: str = PLAN_API_BASE_URL, timeout: float = PLAN_API_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def get_plan(self, user_id: str) -> PlanResponse:
        """Fetch one plan; any transport, status or shape problem raises PlanRequestError."""
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self.transport) as client:
                response = await client.post(GET_PLAN_ENDPOINT, json={"UserID": user_id})
        except httpx.TimeoutException as e:
            raise PlanRequestError("Request timeout", status_code=408) from e
        except httpx.HTTPError as e:
            raise PlanRequestError(f"Network error: {e}") from e

        if not response.is_success:
            raise PlanRequestError(
                f"HTTP Error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise PlanRequestError("GetPlan response is not JSON", status_code=response.status_code) from e
        if not isinstance(data, dict) or any(key not in data for key in REQUIRED_KEYS) \
                or not isinstance(data.get("Alt"), list):
            raise PlanRequestError("Invalid response structure from GetPlan API", status_code=response.status_code)
        try:
            return PlanResponse.model_validate(data)
        except ValidationError as e:
            raise PlanRequestError(f"Invalid response structure from GetPlan API: {e}",
                                   status_code=response.status_code) from e
