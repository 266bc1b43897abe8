"""Planner service: the application state (catalog, weekly plan, checked overlay)
with explicit load/save boundaries.

Every public method runs under one lock and follows validate -> mutate -> persist,
so a failed operation leaves no partial change behind. Write failures are
logged and the in-memory state stays authoritative for the running session.
"""
import logging
from threading import Lock
from typing import Dict, Iterable, List, Optional, Tuple

from mealplanner.domain.Catalog import MealCatalog
from mealplanner.domain.Meal import Meal, parse_ingredients
from mealplanner.domain.Plan import WeeklyPlan, normalize_day
from mealplanner.domain.ShoppingList import CheckedOverlay, ShoppingList, ShoppingListItem
from mealplanner.domain.errors import NotFoundError, PersistenceError, ValidationError
from mealplanner.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from mealplanner.events.event_helpers import (
    publish_meal_added, publish_meal_deleted, publish_meal_updated,
    publish_plan_updated, publish_shopping_generated
)
from mealplanner.infra.Meal_Repository import MealRepository
from mealplanner.infra.Plan_Repository import PlanRepository
from mealplanner.logic.planning.consistency import repair_plan
from mealplanner.logic.shopping.list_builder import build_shopping_list
from mealplanner.utilities.constants import DAYS

logger = logging.getLogger(__name__)


class PlannerService:
    def __init__(self, meal_repository: Optional[MealRepository] = None,
                 plan_repository: Optional[PlanRepository] = None,
                 event_bus: Optional[EventBus] = None):
        self.meal_repository = meal_repository or MealRepository()
        self.plan_repository = plan_repository or PlanRepository()
        self.event_bus = event_bus or GLOBAL_EVENT_BUS
        self.catalog = MealCatalog()
        self.plan = WeeklyPlan()
        self.overlay = CheckedOverlay()
        self.shopping_list: Optional[ShoppingList] = None
        self._lock = Lock()

    # --- Load / save boundaries --------------------------------------------
    def load(self) -> "PlannerService":
        '''Reads catalog, plan and overlay from storage and repairs dangling plan entries.'''
        with self._lock:
            self.catalog = MealCatalog(self.meal_repository.load_meals())
            self.plan = self.plan_repository.load_plan()
            self.overlay = self.plan_repository.load_checked()
            self.shopping_list = None
            stored = self.plan.to_dict()
            repair_plan(self.catalog, self.plan)
            if self.plan.to_dict() != stored:
                self._save_plan()
            logger.info("Loaded %d meals, %d planned days", len(self.catalog), len(self.plan.to_dict()))
        return self

    def _save_meals(self):
        try:
            self.meal_repository.save_meals(self.catalog.get_meals())
        except PersistenceError as e:
            logger.error("Saving meals failed: %s", e)

    def _save_plan(self):
        try:
            self.plan_repository.save_plan(self.plan)
        except PersistenceError as e:
            logger.error("Saving plan failed: %s", e)

    def _save_checked(self):
        try:
            self.plan_repository.save_checked(self.overlay)
        except PersistenceError as e:
            logger.error("Saving shopping list state failed: %s", e)

    # --- Catalog -----------------------------------------------------------
    def list_meals(self) -> List[Meal]:
        with self._lock:
            return self.catalog.get_meals()

    def get_meal(self, meal_id: str) -> Meal:
        with self._lock:
            meal = self.catalog.find_by_id(meal_id)
            if meal is None:
                raise NotFoundError(f"Meal '{meal_id}' not found")
            return meal

    def find_meal_by_name(self, name: str) -> Optional[Meal]:
        with self._lock:
            return self.catalog.find_by_name(name)

    def add_meal(self, name, ingredients, **metadata) -> Meal:
        with self._lock:
            meal = self.catalog.add_meal(name, ingredients, **metadata)
            self._save_meals()
        publish_meal_added(meal, bus=self.event_bus)
        return meal

    def edit_ingredients(self, meal_id: str, ingredients) -> Meal:
        return self.update_meal(meal_id, ingredients=ingredients)

    def rename_meal(self, meal_id: str, name: str) -> Meal:
        return self.update_meal(meal_id, name=name)

    def update_meal(self, meal_id: str, name: Optional[str] = None, ingredients=None) -> Meal:
        '''Renames and/or replaces ingredients; both inputs are validated before anything changes.'''
        with self._lock:
            meal = self.catalog.find_by_id(meal_id)
            if meal is None:
                raise NotFoundError(f"Meal '{meal_id}' not found")
            if ingredients is not None and not parse_ingredients(ingredients):
                raise ValidationError("Ingredients cannot be empty")
            days: List[str] = []
            if name is not None and name.strip() != meal.name:
                meal, days = self.catalog.rename_meal(meal_id, name, self.plan)
            if ingredients is not None:
                meal = self.catalog.edit_ingredients(meal_id, ingredients)
                days = self.plan.days_for(meal_id)
            self._save_meals()
            self._save_plan()
        publish_meal_updated(meal, days, bus=self.event_bus)
        return meal

    def delete_meal(self, meal_id: str) -> Tuple[Meal, List[str]]:
        '''Deletes the meal and empties every plan day that referenced it, as one operation.'''
        with self._lock:
            meal, cleared = self.catalog.delete_meal(meal_id, self.plan)
            self._save_meals()
            self._save_plan()
        publish_meal_deleted(meal, cleared, bus=self.event_bus)
        return meal, cleared

    def merge_remote(self, meals: Iterable) -> List[Meal]:
        with self._lock:
            added = self.catalog.merge_remote(meals)
            if added:
                self._save_meals()
        for meal in added:
            publish_meal_added(meal, bus=self.event_bus)
        return added

    # --- Weekly plan -------------------------------------------------------
    def assign(self, day: str, meal_name: Optional[str]) -> Optional[Meal]:
        '''Assigns a meal by name; an unknown or blank name empties the day.'''
        with self._lock:
            day = normalize_day(day)
            meal_id = self.plan.assign(day, meal_name, self.catalog)
            meal = self.catalog.find_by_id(meal_id) if meal_id else None
            self._save_plan()
        publish_plan_updated(day, meal, bus=self.event_bus)
        return meal

    def unassign(self, day: str) -> bool:
        with self._lock:
            day = normalize_day(day)
            removed = self.plan.unassign(day)
            if removed:
                self._save_plan()
        if removed:
            publish_plan_updated(day, None, bus=self.event_bus)
        return removed

    def plan_view(self) -> Dict[str, Optional[Dict[str, str]]]:
        '''Every day Monday..Sunday with its resolved meal ({id, name}) or None.'''
        with self._lock:
            view: Dict[str, Optional[Dict[str, str]]] = {}
            for day in DAYS:
                meal = self.catalog.find_by_id(self.plan.slots.get(day))
                view[day] = {"id": meal.id, "name": meal.name} if meal else None
            return view

    # --- Shopping list -----------------------------------------------------
    def generate_shopping_list(self) -> ShoppingList:
        '''Rebuilds the list from the current plan and re-applies checked state by item id.'''
        with self._lock:
            shopping_list = build_shopping_list(self.catalog, self.plan)
            before = set(self.overlay.checked_ids)
            self.overlay.apply(shopping_list)
            if self.overlay.checked_ids != before:
                self._save_checked()
            self.shopping_list = shopping_list
        publish_shopping_generated(len(shopping_list), shopping_list.nothing_planned, bus=self.event_bus)
        return shopping_list

    def _current_list(self) -> ShoppingList:
        if self.shopping_list is None:
            shopping_list = build_shopping_list(self.catalog, self.plan)
            self.overlay.apply(shopping_list)
            self.shopping_list = shopping_list
        return self.shopping_list

    def check(self, index: int) -> ShoppingListItem:
        with self._lock:
            item = self.overlay.check(self._current_list(), index)
            self._save_checked()
            return item

    def uncheck(self, index: int) -> ShoppingListItem:
        with self._lock:
            item = self.overlay.uncheck(self._current_list(), index)
            self._save_checked()
            return item

    def clear_checked(self) -> int:
        with self._lock:
            removed = self.overlay.clear_checked(self._current_list())
            if removed:
                self._save_checked()
            return removed

    def clear_all(self):
        with self._lock:
            self.overlay.clear_all(self._current_list())
            self._save_checked()
