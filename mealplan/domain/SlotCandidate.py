"""Menu items tagged with their restaurant, grouped by breakfast/lunch/dinner slot."""
from typing import Dict, List, Optional
from mealplan.domain.MenuItem import MenuItem


class SlotCandidate(MenuItem):
    def __init__(self, item: MenuItem, restaurant: str = "", location: str = ""):
        super().__init__(**item.to_dict())
        self.restaurant = restaurant
        self.location = location

    def to_dict(self):
        d = super().to_dict()
        d["restaurant"] = self.restaurant
        d["location"] = self.location
        return d


class SlottedCandidates:
    def __init__(self, breakfast: Optional[List[SlotCandidate]] = None,
                 lunch: Optional[List[SlotCandidate]] = None,
                 dinner: Optional[List[SlotCandidate]] = None):
        self.breakfast = breakfast[:] if breakfast else []
        self.lunch = lunch[:] if lunch else []
        self.dinner = dinner[:] if dinner else []

    def slot(self, name: str) -> List[SlotCandidate]:
        return getattr(self, name)

    def is_empty(self) -> bool:
        return not (self.breakfast or self.lunch or self.dinner)

    def to_dict(self) -> Dict[str, List[dict]]:
        return {
            "breakfast": [c.to_dict() for c in self.breakfast],
            "lunch": [c.to_dict() for c in self.lunch],
            "dinner": [c.to_dict() for c in self.dinner],
        }
