from fastapi import APIRouter, Depends, HTTPException

from mealplanner.api.dependencies import get_planner
from mealplanner.domain.errors import ValidationError
from mealplanner.logic.planner_service import PlannerService
from mealplanner.utilities.validators import MealInput, MealUpdateInput

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.get("")
def list_meals(planner: PlannerService = Depends(get_planner)):
    return [meal.to_dict() for meal in planner.list_meals()]


@router.get("/{name}")
def get_meal_by_name(name: str, planner: PlannerService = Depends(get_planner)):
    meal = planner.find_meal_by_name(name)
    if meal is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    return meal.to_dict()


@router.post("", status_code=201)
def create_meal(payload: MealInput, planner: PlannerService = Depends(get_planner)):
    meal = planner.add_meal(payload.name, payload.ingredients, **payload.metadata())
    return {"message": "Meal added", "meal": meal.to_dict()}


@router.put("/{meal_id}")
def update_meal(meal_id: str, payload: MealUpdateInput, planner: PlannerService = Depends(get_planner)):
    if payload.name is None and payload.ingredients is None:
        raise ValidationError("Nothing to update: provide a name and/or ingredients")
    meal = planner.update_meal(meal_id, name=payload.name, ingredients=payload.ingredients)
    return {"message": "Meal updated", "meal": meal.to_dict()}


@router.delete("/{meal_id}")
def delete_meal(meal_id: str, planner: PlannerService = Depends(get_planner)):
    meal, cleared = planner.delete_meal(meal_id)
    return {"message": "Meal deleted", "meal": meal.to_dict(), "cleared_days": cleared}
