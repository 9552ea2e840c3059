"""Restaurant domain entity: a named location with an ordered menu."""
import logging
from typing import List, Optional
from mealplan.domain.MenuItem import MenuItem

logger = logging.getLogger(__name__)


class Restaurant:
    def __init__(self, restaurant_id: str = "", name: str = "", location: str = "",
                 items: Optional[List[MenuItem]] = None):
        self.restaurant_id = restaurant_id
        self.name = name
        self.location = location
        self.items = items[:] if items else []

    def __str__(self) -> str:
        return f"{self.name} [{self.location}] - {len(self.items)} items"

    __repr__ = __str__

    def is_located_in(self, location: str) -> bool:
        """Case-insensitive match on the location label."""
        if not self.location:
            return False
        return self.location.strip().lower() == location.strip().lower()

    @staticmethod
    def from_dict(data):
        d = dict(data)
        name = str(d.get("name") or "")
        raw_items = d.get("items")
        if not isinstance(raw_items, list):
            raw_items = []

        items = []
        for entry in raw_items:
            if not isinstance(entry, dict):
                logger.warning(f"Skipping menu entry of {name!r} that is not an object: {entry!r}")
                continue
            try:
                items.append(MenuItem.from_dict(entry))
            except (TypeError, ValueError, OverflowError) as e:
                logger.warning(f"Skipping menu item {entry.get('id')!r} of {name!r}: {e}")

        return Restaurant(
            restaurant_id=str(d.get("restaurant_id", "")),
            name=name,
            location=str(d.get("location") or ""),
            items=items,
        )

    def to_dict(self):
        return {
            "restaurant_id": self.restaurant_id,
            "name": self.name,
            "location": self.location,
            "items": [item.to_dict() for item in self.items],
        }
