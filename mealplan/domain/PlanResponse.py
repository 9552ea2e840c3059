"""Plan response contract shared by the API and the plan client.

Every field has a non-null default so a response always has the same
shape: three primary meals, a list of alternatives and an optional
upstream error message. Field aliases are the wire names.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]


class PlanMeal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field("", alias="Name")
    restaurant: str = Field("", alias="Restaurant")
    calorie: Number = Field(0, alias="Calorie")
    ingredients: List[str] = Field(default_factory=list, alias="Ingredients")
    price: Number = Field(0, alias="Price")
    purchase_url: str = Field("", alias="Purchase_url")
    image_url: str = Field("", alias="Image_url")

    @field_validator("*", mode="before")
    @classmethod
    def none_to_default(cls, v, info):
        """Null values collapse to the field's empty/zero default."""
        if v is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v

    def is_empty(self) -> bool:
        """The unresolved sentinel: no name, no restaurant or no calories."""
        return not self.name or not self.restaurant or self.calorie <= 0


class PlanResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    morn: PlanMeal = Field(default_factory=PlanMeal)
    afternoon: PlanMeal = Field(default_factory=PlanMeal)
    dinner: PlanMeal = Field(default_factory=PlanMeal)
    alternatives: List[PlanMeal] = Field(default_factory=list, alias="Alt")
    llm_error: Optional[str] = None

    def primary_meals(self) -> List[PlanMeal]:
        return [self.morn, self.afternoon, self.dinner]

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
