import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from mealplan.domain.Restaurant import Restaurant
from mealplan.infra.paths import CATALOG_FILE
from mealplan.utilities.errors import CatalogUnavailableError

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Read-only access to the restaurant catalog document."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else CATALOG_FILE

    def get_catalog(self) -> List[Restaurant]:
        """Return a fresh snapshot of all restaurants and their menu items."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Catalog file not found: {self.path}. Returning empty catalog.")
            return []
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in catalog file: {e}")
            raise CatalogUnavailableError(f"Catalog file is not valid JSON: {self.path}") from e

        if isinstance(document, dict):
            entries = document.get("restaurants") or []
        elif isinstance(document, list):
            entries = document
        else:
            raise CatalogUnavailableError(f"Unexpected catalog document type: {type(document).__name__}")
        return [Restaurant.from_dict(entry) for entry in entries if isinstance(entry, dict)]
