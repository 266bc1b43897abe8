from typing import Final, Tuple

DAYS: Final[Tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
)

MEALS_FILE_NAME: Final[str] = "meals.json"
PLAN_FILE_NAME: Final[str] = "plan.json"
CHECKED_FILE_NAME: Final[str] = "shopping_checked.json"

NOTHING_PLANNED_MESSAGE: Final[str] = (
    "No meals planned for this week. Add some meals to your weekly plan!"
)
MAX_EVENTS: Final[int] = 300
