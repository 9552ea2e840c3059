"""Breakfast/lunch/dinner classification by serving-window overlap."""
from typing import List

from mealplan.domain.Restaurant import Restaurant
from mealplan.domain.SlotCandidate import SlotCandidate, SlottedCandidates
from mealplan.utilities.constants import SLOT_NAMES, SLOT_WINDOWS


def classify_time_slots(restaurants: List[Restaurant]) -> SlottedCandidates:
    """Bucket every menu item into each slot whose window it covers.

    Slots are checked independently, so an item served all day shows up in
    breakfast, lunch and dinner. Catalog order is preserved inside a slot.
    """
    slots = {name: [] for name in SLOT_NAMES}
    for restaurant in restaurants:
        for item in restaurant.items:
            for name in SLOT_NAMES:
                latest_start, earliest_end = SLOT_WINDOWS[name]
                if item.serves_between(latest_start, earliest_end):
                    slots[name].append(SlotCandidate(item, restaurant.name, restaurant.location))
    return SlottedCandidates(**slots)
