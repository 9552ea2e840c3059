from typing import Final

# Serving-window thresholds per slot: an item belongs to a slot when
# start_time <= latest_start and end_time >= earliest_end.
SLOT_WINDOWS: Final[dict[str, tuple[int, int]]] = {
    "breakfast": (8, 11),
    "lunch": (11, 14),
    "dinner": (18, 21),
}
SLOT_NAMES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")

# Slot name -> response field
SLOT_RESPONSE_FIELDS: Final[dict[str, str]] = {
    "breakfast": "morn",
    "lunch": "afternoon",
    "dinner": "dinner",
}

DEFAULT_UNIT: Final[str] = "metric"
MAX_MOCK_ALTERNATIVES: Final[int] = 3
LOADING_PLACEHOLDER_TEXT: Final[str] = "Meal plan is still being prepared, please try again shortly."

DEFAULT_PROMPT_TEMPLATE: Final[str] = (
    """You are a nutrition assistant choosing restaurant meals for one day.
Use ONLY the meals listed in the JSON object at the end of this message. It groups
the available menu items into "breakfast", "lunch" and "dinner" by serving time.
Pick one meal for each slot that suits the user below, and up to five alternatives
from any slot. Respect dietary restrictions strictly.

Respond with JSON only, no surrounding text, in exactly this format:
{
    "breakfast": "<id of the chosen breakfast item>",
    "lunch": "<id of the chosen lunch item>",
    "dinner": "<id of the chosen dinner item>",
    "alternatives": ["<id>", "<id>"]
}
"""
)
