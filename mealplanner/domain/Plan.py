"""WeeklyPlan domain entity: one optional meal reference (by meal id) per day of the week."""
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from mealplanner.domain.errors import ValidationError
from mealplanner.utilities.constants import DAYS

logger = logging.getLogger(__name__)


def normalize_day(day) -> str:
    '''Maps "monday", " Monday " etc. to the canonical label; raises ValidationError otherwise.'''
    if isinstance(day, str):
        cleaned = day.strip().capitalize()
        if cleaned in DAYS:
            return cleaned
    raise ValidationError(f"Unknown day '{day}'. Expected one of: {', '.join(DAYS)}")


class WeeklyPlan:
    def __init__(self, slots: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = {}
        for day, meal_id in (slots or {}).items():
            if meal_id:
                self.slots[normalize_day(day)] = str(meal_id)

    def get(self, day) -> Optional[str]:
        return self.slots.get(normalize_day(day))

    def assign(self, day, meal_name, catalog) -> Optional[str]:
        '''
        Assigns the meal called meal_name to the day.
        An unknown or blank name empties the slot instead. Returns the stored meal id or None.
        '''
        day = normalize_day(day)
        meal = catalog.find_by_name(meal_name) if meal_name else None
        if meal is None:
            if meal_name:
                logger.info("No meal named %r; clearing %s", meal_name, day)
            self.unassign(day)
            return None
        self.slots[day] = meal.id
        return meal.id

    def unassign(self, day) -> bool:
        '''Empties the slot; returns True if something was removed.'''
        return self.slots.pop(normalize_day(day), None) is not None

    def assignments(self) -> Iterator[Tuple[str, str]]:
        '''Yields (day, meal_id) for assigned slots in Monday..Sunday order.'''
        for day in DAYS:
            meal_id = self.slots.get(day)
            if meal_id:
                yield day, meal_id

    def days_for(self, meal_id: str) -> List[str]:
        return [day for day, ref in self.assignments() if ref == meal_id]

    def is_empty(self) -> bool:
        return not self.slots

    def __eq__(self, other) -> bool:
        if not isinstance(other, WeeklyPlan):
            return NotImplemented
        return self.slots == other.slots

    def __str__(self) -> str:
        return "Plan: " + ", ".join(f"{day}={ref}" for day, ref in self.assignments())

    __repr__ = __str__

    @staticmethod
    def from_dict(data) -> "WeeklyPlan":
        '''Builds a plan from a persisted mapping; unknown day labels are dropped.'''
        plan = WeeklyPlan()
        if not isinstance(data, dict):
            return plan
        for day, ref in data.items():
            if not ref or not isinstance(ref, (str, int)):
                continue
            try:
                plan.slots[normalize_day(day)] = str(ref)
            except ValidationError:
                logger.warning("Ignoring plan entry for unknown day %r", day)
        return plan

    def to_dict(self):
        return {day: ref for day, ref in self.assignments()}
