"""Meal catalog aggregate: every known meal, keyed by id with a case-insensitive name index."""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from mealplanner.domain.Meal import Meal, new_meal_id, normalize_name, parse_ingredients
from mealplanner.domain.Plan import WeeklyPlan
from mealplanner.domain.errors import NotFoundError, ValidationError
from mealplanner.logic.planning.consistency import on_meal_deleted, on_meal_renamed

logger = logging.getLogger(__name__)


class MealCatalog:
    def __init__(self, meals: Optional[Iterable[Meal]] = None):
        self._meals: Dict[str, Meal] = {}
        self._by_name: Dict[str, str] = {}
        for meal in meals or []:
            self._insert(meal)

    # --- Index helpers -----------------------------------------------------
    def _insert(self, meal: Meal):
        key = normalize_name(meal.name)
        if not key:
            raise ValidationError("Meal name is required")
        if key in self._by_name:
            raise ValidationError(f"A meal named '{meal.name}' already exists")
        if meal.id in self._meals:
            raise ValidationError(f"Duplicate meal id '{meal.id}'")
        self._meals[meal.id] = meal
        self._by_name[key] = meal.id

    def _require(self, meal_id: str) -> Meal:
        meal = self._meals.get(meal_id)
        if meal is None:
            raise NotFoundError(f"Meal '{meal_id}' not found")
        return meal

    # --- Lookup ------------------------------------------------------------
    def find_by_id(self, meal_id) -> Optional[Meal]:
        if meal_id is None:
            return None
        return self._meals.get(str(meal_id))

    def find_by_name(self, name) -> Optional[Meal]:
        meal_id = self._by_name.get(normalize_name(name))
        return self._meals.get(meal_id) if meal_id else None

    def get_meals(self) -> List[Meal]:
        '''Returns the meals in insertion order.'''
        return list(self._meals.values())

    def __len__(self) -> int:
        return len(self._meals)

    def __iter__(self):
        return iter(self.get_meals())

    def __contains__(self, meal_id) -> bool:
        return meal_id in self._meals

    # --- Mutations ---------------------------------------------------------
    def add_meal(self, name, ingredients, **metadata) -> Meal:
        '''
        Adds a meal built from raw input and returns it.
        Raises ValidationError for an empty name, empty ingredients or a duplicate name.
        '''
        meal = Meal.create(name, ingredients, **metadata)
        self._insert(meal)
        logger.info("Meal added: %s (%s)", meal.name, meal.id)
        return meal

    def edit_ingredients(self, meal_id: str, new_ingredients) -> Meal:
        '''Replaces the ingredient list in place; id and name are kept.'''
        meal = self._require(meal_id)
        lines = parse_ingredients(new_ingredients)
        if not lines:
            raise ValidationError("Ingredients cannot be empty")
        meal.ingredients = lines
        logger.info("Ingredients updated for %s: %d lines", meal.name, len(lines))
        return meal

    def rename_meal(self, meal_id: str, new_name, plan: Optional[WeeklyPlan] = None) -> Tuple[Meal, List[str]]:
        '''
        Renames a meal and refreshes the name index.
        Returns the meal and the plan days that reference it.
        '''
        meal = self._require(meal_id)
        clean = new_name.strip() if isinstance(new_name, str) else ""
        if not clean:
            raise ValidationError("Meal name is required")
        key = normalize_name(clean)
        owner = self._by_name.get(key)
        if owner is not None and owner != meal.id:
            raise ValidationError(f"A meal named '{clean}' already exists")
        old_name = meal.name
        del self._by_name[normalize_name(old_name)]
        meal.name = clean
        self._by_name[key] = meal.id
        days = on_meal_renamed(plan, meal.id, old_name, clean) if plan is not None else []
        logger.info("Meal renamed: %s -> %s", old_name, clean)
        return meal, days

    def delete_meal(self, meal_id: str, plan: Optional[WeeklyPlan] = None) -> Tuple[Meal, List[str]]:
        '''
        Removes a meal. When a plan is given, every slot assigned to the meal is
        emptied in the same call. Returns the removed meal and the cleared days.
        '''
        meal = self._require(meal_id)
        del self._meals[meal.id]
        self._by_name.pop(normalize_name(meal.name), None)
        cleared = on_meal_deleted(plan, meal.id) if plan is not None else []
        logger.info("Meal deleted: %s (cleared days: %s)", meal.name, cleared or "none")
        return meal, cleared

    def merge_remote(self, meals: Iterable) -> List[Meal]:
        '''
        Appends remote meals whose name is not in the catalog yet.
        Name is the de-duplication key; colliding or missing ids are replaced.
        '''
        added: List[Meal] = []
        for entry in meals:
            meal = entry if isinstance(entry, Meal) else Meal.from_dict(entry)
            if not meal.name or not meal.ingredients:
                logger.warning("Skipping invalid remote meal: %r", entry)
                continue
            if self.find_by_name(meal.name) is not None:
                continue
            if meal.id in self._meals:
                meal.id = new_meal_id()
            self._insert(meal)
            added.append(meal)
        if added:
            logger.info("Merged %d remote meals into the catalog", len(added))
        return added

    # --- Persistence helpers -----------------------------------------------
    @staticmethod
    def from_dict(data) -> "MealCatalog":
        '''
        Builds a catalog from persisted records, skipping invalid or duplicate
        entries instead of failing the whole load.
        '''
        catalog = MealCatalog()
        for entry in data or []:
            meal = Meal.from_dict(entry)
            if not meal.name or not meal.ingredients:
                logger.warning("Dropping invalid stored meal: %r", entry)
                continue
            try:
                catalog._insert(meal)
            except ValidationError as e:
                logger.warning("Dropping stored meal %r: %s", meal.name, e)
        return catalog

    def to_dict(self):
        return [meal.to_dict() for meal in self._meals.values()]
