from fastapi import APIRouter, Depends

from mealplanner.api.dependencies import get_planner
from mealplanner.domain.Plan import normalize_day
from mealplanner.logic.planner_service import PlannerService
from mealplanner.utilities.validators import PlanAssignInput

router = APIRouter(prefix="/api/plan", tags=["plan"])


@router.get("")
def get_plan(planner: PlannerService = Depends(get_planner)):
    return {"days": planner.plan_view()}


@router.put("/{day}")
def assign_day(day: str, payload: PlanAssignInput, planner: PlannerService = Depends(get_planner)):
    """Assign a meal by name. Unknown or blank names clear the day instead of failing."""
    meal = planner.assign(day, payload.meal_name)
    return {"day": normalize_day(day), "meal": meal.to_dict() if meal else None}


@router.delete("/{day}")
def unassign_day(day: str, planner: PlannerService = Depends(get_planner)):
    removed = planner.unassign(day)
    return {"day": normalize_day(day), "removed": removed}
