"""Error types shared by the plan pipeline, the HTTP layer and the plan client."""
from typing import Optional


class MealPlanError(Exception):
    """Base error; status_code is what the HTTP layer answers with."""
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidRequestError(MealPlanError):
    status_code = 400


class UserNotFoundError(MealPlanError):
    status_code = 404

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class CatalogUnavailableError(MealPlanError):
    status_code = 503


class GenerationRequestError(MealPlanError):
    """The text-generation service could not be reached or answered badly."""
    status_code = 502


class PlanRequestError(MealPlanError):
    """A single GetPlan call from the client side failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RetryBudgetExhaustedError(MealPlanError):
    def __init__(self, attempts: int):
        super().__init__(f"Failed to get valid meal plan after {attempts} attempts")
        self.attempts = attempts


class PollingCancelledError(MealPlanError):
    def __init__(self, key: str, attempts: int):
        super().__init__(f"Meal plan polling for {key} was cancelled after {attempts} attempts")
        self.key = key
        self.attempts = attempts
