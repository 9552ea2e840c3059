"""MenuItem domain entity: one dish on a restaurant menu with serving window and nutrition."""
from typing import List, Optional


def _hour(value) -> int:
    """Hour of day from a number or an "HH" / "HH:MM" string; raises ValueError otherwise."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"invalid hour: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    return int(str(value).strip().split(":", 1)[0])


class MenuItem:
    def __init__(self, id: str = "", name: str = "", description: str = "", price: float = 0,
                 start_time: int = 0, end_time: int = 0, calories: int = 0,
                 carbohydrates: float = 0, protein: float = 0, is_vegetarian: bool = False,
                 tags: Optional[List[str]] = None, health_tags: Optional[List[str]] = None,
                 ingredients: Optional[List[str]] = None, image: str = "", purchase_url: str = ""):
        self.id = id
        self.name = name
        self.description = description
        self.price = price
        self.start_time = start_time
        self.end_time = end_time
        self.calories = calories
        self.carbohydrates = carbohydrates
        self.protein = protein
        self.is_vegetarian = is_vegetarian
        self.tags = tags[:] if tags else []
        self.health_tags = health_tags[:] if health_tags else []
        self.ingredients = ingredients[:] if ingredients else []
        self.image = image
        self.purchase_url = purchase_url

    def __str__(self) -> str:
        return f"{self.name} ({self.id}) - {self.start_time}h-{self.end_time}h - {self.calories} kcal"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, MenuItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def serves_between(self, latest_start: int, earliest_end: int) -> bool:
        """True when the serving window covers [latest_start, earliest_end]."""
        return self.start_time <= latest_start and self.end_time >= earliest_end

    @staticmethod
    def from_dict(data):
        d = data or {}
        return MenuItem(
            id=str(d.get("id", "")),
            name=d.get("name") or "",
            description=d.get("description") or "",
            price=d.get("price") or 0,
            start_time=_hour(d.get("start_time")),
            end_time=_hour(d.get("end_time")),
            calories=d.get("calories") or 0,
            carbohydrates=d.get("carbohydrates") or 0,
            protein=d.get("protein") or 0,
            is_vegetarian=bool(d.get("is_vegetarian", False)),
            tags=d.get("tags"),
            health_tags=d.get("health_tags"),
            ingredients=d.get("ingredients"),
            image=d.get("image") or "",
            purchase_url=d.get("purchase_url") or "",
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "calories": self.calories,
            "carbohydrates": self.carbohydrates,
            "protein": self.protein,
            "is_vegetarian": self.is_vegetarian,
            "tags": self.tags,
            "health_tags": self.health_tags,
            "ingredients": self.ingredients,
            "image": self.image,
            "purchase_url": self.purchase_url,
        }
