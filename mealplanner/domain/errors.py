"""Error taxonomy shared by the catalog, plan and storage layers."""


class MealPlannerError(Exception):
    """Base class for every error raised by the planner core."""


class ValidationError(MealPlannerError, ValueError):
    """Required input is empty or invalid; the operation changes nothing."""


class NotFoundError(MealPlannerError, LookupError):
    """The targeted meal, day slot or shopping item does not exist."""


class PersistenceError(MealPlannerError, OSError):
    """Reading or writing a data file failed."""
