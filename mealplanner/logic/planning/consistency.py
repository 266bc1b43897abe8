"""Keeps the weekly plan consistent with the meal catalog.

Invariant: every assigned day references a meal id present in the catalog.
Plan entries hold meal ids, so a rename never has to touch the plan; plan
files written by the older name-keyed format are converted to ids by
repair_plan() when they are loaded.
"""
import logging
from typing import List

from mealplanner.domain.Plan import WeeklyPlan

logger = logging.getLogger(__name__)


def on_meal_deleted(plan: WeeklyPlan, meal_id: str) -> List[str]:
    """Empty every day assigned to meal_id. Returns the cleared days in week order."""
    cleared = plan.days_for(meal_id)
    for day in cleared:
        plan.unassign(day)
    return cleared


def on_meal_renamed(plan: WeeklyPlan, meal_id: str, old_name: str, new_name: str) -> List[str]:
    """Return the days showing the renamed meal.

    Id references stay valid. A leftover legacy entry holding the old name
    is pointed at the meal id.
    """
    for day, ref in list(plan.assignments()):
        if ref == old_name and ref != meal_id:
            plan.slots[day] = meal_id
    days = plan.days_for(meal_id)
    if days:
        logger.debug("Rename %r -> %r affects %s", old_name, new_name, days)
    return days


def find_dangling(catalog, plan: WeeklyPlan) -> List[str]:
    return [day for day, ref in plan.assignments() if catalog.find_by_id(ref) is None]


def repair_plan(catalog, plan: WeeklyPlan) -> List[str]:
    """Convert legacy name references to ids and clear references to unknown meals.

    Returns the days that had to be cleared.
    """
    for day, ref in list(plan.assignments()):
        if catalog.find_by_id(ref) is None:
            meal = catalog.find_by_name(ref)
            if meal is not None:
                plan.slots[day] = meal.id
    dangling = find_dangling(catalog, plan)
    for day in dangling:
        plan.unassign(day)
    if dangling:
        logger.warning("Cleared plan days referencing missing meals: %s", dangling)
    return dangling


def check_plan(catalog, plan: WeeklyPlan) -> bool:
    return not find_dangling(catalog, plan)


__all__ = ['on_meal_deleted', 'on_meal_renamed', 'find_dangling', 'repair_plan', 'check_plan']
