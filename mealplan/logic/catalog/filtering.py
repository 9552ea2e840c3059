"""Candidate selection: keep the restaurants that serve the user's location."""
from typing import List, Optional

from mealplan.domain.Restaurant import Restaurant


def filter_by_location(restaurants: List[Restaurant], location: Optional[str]) -> List[Restaurant]:
    """Return restaurants whose location matches case-insensitively.

    An empty or missing user location keeps every restaurant. No match is an
    empty list, not an error.
    """
    if not location or not location.strip():
        return list(restaurants)
    return [r for r in restaurants if r.is_located_in(location)]
