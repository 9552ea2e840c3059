"""Prompt composition: instructions + user info block + slotted candidates as JSON."""
import json
import logging
from pathlib import Path
from typing import Optional, Union

from mealplan.domain.SlotCandidate import SlottedCandidates
from mealplan.domain.UserProfile import UserProfile
from mealplan.utilities.constants import DEFAULT_PROMPT_TEMPLATE, DEFAULT_UNIT

logger = logging.getLogger(__name__)


def _text(value) -> str:
    if value is None:
        return ""
    return str(value)


def format_user_info(profile: UserProfile) -> str:
    """Human-readable block describing the user, one field per line."""
    unit = profile.unit or DEFAULT_UNIT
    lines = [
        "User Info:",
        f"Location: {_text(profile.location)}",
        f"Age: {_text(profile.age)}",
        f"Height: {_text(profile.height)} ({unit})",
        f"Weight: {_text(profile.weight)} ({unit})",
        f"Goal: {_text(profile.goal)}",
        f"Activity Level: {_text(profile.activity_level)}",
        f"Target Weight: {_text(profile.target_weight)}",
        f"Dietary Restrictions: {', '.join(profile.dietary_restrictions)}",
        f"Preferred Cuisines: {', '.join(profile.preferred_cuisines)}",
        f"Meals Per Day: {_text(profile.meals_per_day)}",
    ]
    return "\n".join(lines) + "\n"


def compose_prompt(instructions: str, profile: UserProfile, slots: SlottedCandidates) -> str:
    """Concatenate the instructions, the user block and the candidate JSON."""
    candidates_json = json.dumps(slots.to_dict(), indent=2, ensure_ascii=False)
    return instructions + "\n" + format_user_info(profile) + "\n" + candidates_json


def load_instructions(path: Optional[Union[str, Path]] = None) -> str:
    """Read the instruction template, falling back to the bundled default."""
    if path is None:
        return DEFAULT_PROMPT_TEMPLATE
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        logger.warning(f"Prompt file not found: {path}. Using built-in instructions.")
        return DEFAULT_PROMPT_TEMPLATE
