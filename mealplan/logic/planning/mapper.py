"""Map the generation service's (untrusted) choices back to catalog meals.

The model answers with item ids per slot, e.g.::

    {"breakfast": "APP101", "lunch": "PASTA001", "dinner": "...", "alternatives": ["..."]}

Anything that cannot be resolved against the filtered catalog becomes the
empty PlanMeal sentinel; a non-object answer yields an all-empty response.
"""
from typing import Any, Dict, List, Optional

from mealplan.domain.PlanResponse import PlanMeal, PlanResponse
from mealplan.domain.Restaurant import Restaurant
from mealplan.domain.SlotCandidate import SlotCandidate
from mealplan.utilities.constants import SLOT_RESPONSE_FIELDS


class CatalogIndex:
    """Item-id lookup over the filtered restaurants, built once per request."""

    def __init__(self, restaurants: List[Restaurant]):
        self._by_id: Dict[str, SlotCandidate] = {}
        for restaurant in restaurants:
            for item in restaurant.items:
                # first occurrence wins, like a front-to-back scan
                self._by_id.setdefault(str(item.id), SlotCandidate(item, restaurant.name, restaurant.location))

    def __len__(self) -> int:
        return len(self._by_id)

    def find_meal(self, identifier: Any) -> Optional[SlotCandidate]:
        if identifier is None or isinstance(identifier, (dict, list, bool)):
            return None
        key = str(identifier)
        if not key.strip():
            return None
        return self._by_id.get(key)


def map_to_plan_meal(candidate: Optional[SlotCandidate]) -> PlanMeal:
    if candidate is None:
        return PlanMeal()
    return PlanMeal(
        name=candidate.name or "",
        restaurant=candidate.restaurant or "",
        calorie=candidate.calories or 0,
        ingredients=candidate.ingredients or candidate.health_tags or candidate.tags or [],
        price=candidate.price or 0,
        purchase_url=candidate.purchase_url or "",
        image_url=candidate.image or "",
    )


def map_generated_plan(generated: Any, index: CatalogIndex, error: Optional[str] = None) -> PlanResponse:
    """Build the fixed-shape response from whatever the model returned."""
    plan = generated if isinstance(generated, dict) else {}

    meals = {
        field: map_to_plan_meal(index.find_meal(plan.get(slot)))
        for slot, field in SLOT_RESPONSE_FIELDS.items()
    }

    alternatives = []
    raw_alternatives = plan.get("alternatives")
    if isinstance(raw_alternatives, list):
        for identifier in raw_alternatives:
            candidate = index.find_meal(identifier)
            if candidate is not None:
                alternatives.append(map_to_plan_meal(candidate))

    return PlanResponse(**meals, alternatives=alternatives, llm_error=error or None)
