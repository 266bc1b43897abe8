from fastapi import Request

from mealplanner.logic.planner_service import PlannerService


def get_planner(request: Request) -> PlannerService:
    """The PlannerService owned by the running app (see api_run.create_app)."""
    return request.app.state.planner
