"""Meal catalog repository (file persistence)."""
import logging
from pathlib import Path
from typing import List, Optional

from mealplanner.domain.Catalog import MealCatalog
from mealplanner.domain.Meal import Meal
from mealplanner.infra.json_files import atomic_write, read_json
from mealplanner.infra.paths import DATA_DIR, data_file
from mealplanner.utilities.constants import MEALS_FILE_NAME

logger = logging.getLogger(__name__)


class MealRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.path = data_file(data_dir or DATA_DIR, MEALS_FILE_NAME)

    def load_meals(self) -> List[Meal]:
        """Read meals stored as {"meals": [...]} (or a bare list); malformed data yields []."""
        data = read_json(self.path, {"meals": []})
        if isinstance(data, dict):
            data = data.get("meals", [])
        if not isinstance(data, list):
            logger.warning(f"Unexpected meals format in {self.path}. Returning empty list.")
            return []
        return MealCatalog.from_dict(data).get_meals()

    def save_meals(self, meals) -> None:
        atomic_write(self.path, {"meals": [meal.to_dict() for meal in meals]})
