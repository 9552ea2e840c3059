"""
Input validation schemas using Pydantic for the plan endpoints.
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from mealplan.utilities.errors import InvalidRequestError


class PlanRequest(BaseModel):
    """Schema for a GetPlan request body."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("UserID", "userId", "user_id"),
        serialization_alias="UserID",
    )

    @field_validator('user_id')
    @classmethod
    def validate_user_id(cls, v):
        """Reject blank ids and strip surrounding whitespace."""
        if not v.strip():
            raise ValueError('UserID is required')
        return v.strip()


def require_user_id(user_id) -> str:
    """Validate a user id passed directly to the service layer."""
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidRequestError("UserID is required")
    return user_id.strip()
