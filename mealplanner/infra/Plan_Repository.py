"""Weekly plan and shopping-list overlay repository (file persistence)."""
import logging
from pathlib import Path
from typing import Optional

from mealplanner.domain.Plan import WeeklyPlan
from mealplanner.domain.ShoppingList import CheckedOverlay
from mealplanner.infra.json_files import atomic_write, read_json
from mealplanner.infra.paths import DATA_DIR, data_file
from mealplanner.utilities.constants import CHECKED_FILE_NAME, PLAN_FILE_NAME

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        base = data_dir or DATA_DIR
        self.plan_path = data_file(base, PLAN_FILE_NAME)
        self.checked_path = data_file(base, CHECKED_FILE_NAME)

    def load_plan(self) -> WeeklyPlan:
        data = read_json(self.plan_path, {})
        if not isinstance(data, dict):
            logger.warning(f"Unexpected plan format in {self.plan_path}. Starting with an empty week.")
            data = {}
        return WeeklyPlan.from_dict(data)

    def save_plan(self, plan: WeeklyPlan) -> None:
        atomic_write(self.plan_path, plan.to_dict())

    def load_checked(self) -> CheckedOverlay:
        return CheckedOverlay.from_list(read_json(self.checked_path, []))

    def save_checked(self, overlay: CheckedOverlay) -> None:
        atomic_write(self.checked_path, overlay.to_list())
