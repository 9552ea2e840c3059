"""UserProfile domain entity: the read-only personal data used to personalize a plan."""
from typing import Iterable, List, Optional
from mealplan.utilities.constants import DEFAULT_UNIT


def _unique(values: Optional[Iterable[str]]) -> List[str]:
    """Deduplicate while keeping first-seen order."""
    seen: List[str] = []
    for v in values or []:
        if v and v not in seen:
            seen.append(v)
    return seen


class UserProfile:
    def __init__(self, user_id: str = "", location: str = "", age: Optional[int] = None,
                 height: Optional[float] = None, weight: Optional[float] = None,
                 unit: str = DEFAULT_UNIT, goal: str = "", activity_level: str = "",
                 target_weight: Optional[float] = None,
                 dietary_restrictions: Optional[Iterable[str]] = None,
                 preferred_cuisines: Optional[Iterable[str]] = None,
                 meals_per_day: Optional[int] = None):
        self.user_id = user_id
        self.location = location
        self.age = age
        self.height = height
        self.weight = weight
        self.unit = unit or DEFAULT_UNIT
        self.goal = goal
        self.activity_level = activity_level
        self.target_weight = target_weight
        self.dietary_restrictions = _unique(dietary_restrictions)
        self.preferred_cuisines = _unique(preferred_cuisines)
        self.meals_per_day = meals_per_day

    def __str__(self) -> str:
        return f"UserProfile({self.user_id}, location={self.location!r}, goal={self.goal!r})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        """Build from a user-store record; camelCase keys are accepted too."""
        d = dict(data)

        def pick(snake, camel=None):
            if snake in d:
                return d[snake]
            return d.get(camel) if camel else None

        return UserProfile(
            user_id=str(pick("user_id", "_id") or d.get("id") or ""),
            location=pick("location") or "",
            age=pick("age"),
            height=pick("height"),
            weight=pick("weight"),
            unit=pick("unit") or DEFAULT_UNIT,
            goal=pick("goal") or "",
            activity_level=pick("activity_level", "activityLevel") or "",
            target_weight=pick("target_weight", "targetWeight"),
            dietary_restrictions=pick("dietary_restrictions", "dietaryRestrictions"),
            preferred_cuisines=pick("preferred_cuisines", "preferredCuisines"),
            meals_per_day=pick("meals_per_day", "mealsPerDay"),
        )

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "location": self.location,
            "age": self.age,
            "height": self.height,
            "weight": self.weight,
            "unit": self.unit,
            "goal": self.goal,
            "activity_level": self.activity_level,
            "target_weight": self.target_weight,
            "dietary_restrictions": list(self.dietary_restrictions),
            "preferred_cuisines": list(self.preferred_cuisines),
            "meals_per_day": self.meals_per_day,
        }
