"""Shopping list builder.

Provides build_shopping_list(catalog, plan) and format_shopping_list(items).

Normalization policy: ingredients are counted under their trimmed,
case-folded text ("Tomato" and " tomato" are one item). The first spelling
seen is kept for display. Nothing else (plurals, quantities, units) is
normalized.

Counts are per ingredient line: a meal listing "Tomato" and "tomato" adds 2
for each day it is planned. When every meal lists an ingredient at most once,
this equals the number of planned days whose meal contains it.
"""
from typing import Dict, List

from mealplanner.domain.Plan import WeeklyPlan
from mealplanner.domain.ShoppingList import ShoppingList, ShoppingListItem


def ingredient_key(text: str) -> str:
    return (text or '').strip().casefold()


def build_shopping_list(catalog, plan: WeeklyPlan) -> ShoppingList:
    """Aggregate the ingredients of every planned meal.

    Args:
        catalog: MealCatalog used to resolve the plan's meal ids.
        plan: WeeklyPlan; days are walked Monday..Sunday and a meal planned
            on two days is counted twice.

    Returns:
        ShoppingList ordered by first appearance. When no day has a meal the
        list is empty and ``nothing_planned`` is True.

    Neither argument is modified.
    """
    meals = []
    for _day, meal_id in plan.assignments():
        meal = catalog.find_by_id(meal_id)
        if meal is not None:
            meals.append(meal)
    if not meals:
        return ShoppingList(nothing_planned=True)

    items: Dict[str, ShoppingListItem] = {}
    for meal in meals:
        for text in meal.ingredients:
            key = ingredient_key(text)
            if not key:
                continue
            if key in items:
                items[key].count += 1
            else:
                # dicts keep insertion order, which is the first-seen order
                items[key] = ShoppingListItem(key, text.strip(), 1)
    return ShoppingList(list(items.values()))


def format_shopping_list(items) -> List[str]:
    """Display strings: the ingredient alone, or "<ingredient> (<count>x)" for repeats."""
    if isinstance(items, ShoppingList):
        items = items.items
    return [item.label for item in items]


__all__ = ['build_shopping_list', 'format_shopping_list', 'ingredient_key']
