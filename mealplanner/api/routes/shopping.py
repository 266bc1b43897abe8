from fastapi import APIRouter, Depends, Response

from mealplanner.api.dependencies import get_planner
from mealplanner.domain.ShoppingList import ShoppingList
from mealplanner.infra.pdf_utils import generate_pdf_for_week
from mealplanner.logic.planner_service import PlannerService
from mealplanner.utilities.constants import NOTHING_PLANNED_MESSAGE

router = APIRouter(prefix="/api/shopping-list", tags=["shopping-list"])


def _payload(shopping_list: ShoppingList) -> dict:
    return {
        "items": [item.to_dict() for item in shopping_list.items],
        "count": len(shopping_list),
        "nothing_planned": shopping_list.nothing_planned,
        "message": NOTHING_PLANNED_MESSAGE if shopping_list.nothing_planned else None,
    }


@router.get("")
def get_shopping_list(planner: PlannerService = Depends(get_planner)):
    """Regenerate the list from the current plan; checked state is carried over by item id."""
    return _payload(planner.generate_shopping_list())


@router.post("/check/{index}")
def check_item(index: int, planner: PlannerService = Depends(get_planner)):
    return {"item": planner.check(index).to_dict()}


@router.post("/uncheck/{index}")
def uncheck_item(index: int, planner: PlannerService = Depends(get_planner)):
    return {"item": planner.uncheck(index).to_dict()}


@router.post("/clear-checked")
def clear_checked(planner: PlannerService = Depends(get_planner)):
    removed = planner.clear_checked()
    data = _payload(planner.shopping_list)
    data["removed"] = removed
    return data


@router.post("/clear")
def clear_all(planner: PlannerService = Depends(get_planner)):
    planner.clear_all()
    return _payload(planner.shopping_list)


@router.get("/pdf")
def export_pdf(planner: PlannerService = Depends(get_planner)):
    pdf_bytes = generate_pdf_for_week(planner.plan_view(), planner.generate_shopping_list())
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="meal_plan.pdf"'},
    )
