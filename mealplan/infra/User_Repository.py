import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from mealplan.domain.UserProfile import UserProfile
from mealplan.infra.paths import USERS_FILE
from mealplan.utilities.errors import UserNotFoundError

logger = logging.getLogger(__name__)


class UserRepository:
    """Read-only lookup of user profiles stored as a JSON document."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else USERS_FILE

    def _load(self) -> Dict[str, dict]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Users file not found: {self.path}")
            return {}
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in users file: {e}")
            return {}
        records = document.get("users", []) if isinstance(document, dict) else document
        by_id = {}
        for record in records or []:
            if not isinstance(record, dict):
                continue
            key = record.get("_id") or record.get("id") or record.get("user_id")
            if key is not None:
                by_id[str(key)] = record
        return by_id

    def get_user_profile(self, user_id: str) -> UserProfile:
        record = self._load().get(str(user_id))
        if record is None:
            raise UserNotFoundError()
        profile = UserProfile.from_dict(record)
        profile.user_id = str(user_id)
        return profile
