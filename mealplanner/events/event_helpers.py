"""Event helper utilities.

Thin wrappers that build the payloads for catalog and plan events so the
planner service does not repeat the dict shapes.

Quick import:
    from mealplanner.events.event_helpers import (
        publish_meal_added, publish_meal_deleted, publish_plan_updated
    )
"""
from __future__ import annotations
from typing import Any, Iterable, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    MEAL_ADDED, MEAL_UPDATED, MEAL_DELETED,
    PLAN_UPDATED, PLAN_SLOT_CLEARED, SHOPPING_GENERATED
)

__all__ = [
    'publish_meal_added', 'publish_meal_updated', 'publish_meal_deleted',
    'publish_plan_updated', 'publish_shopping_generated'
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_meal_added(meal: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(MEAL_ADDED, {'meal': meal})


def publish_meal_updated(meal: Any, days: Iterable[str] = (), bus: Optional[EventBus] = None):
    _bus(bus).publish(MEAL_UPDATED, {'meal': meal, 'days': list(days)})


def publish_meal_deleted(meal: Any, cleared_days: Iterable[str], bus: Optional[EventBus] = None):
    """Publish meal.deleted plus one plan.slot_cleared per emptied day."""
    cleared = list(cleared_days)
    b = _bus(bus)
    b.publish(MEAL_DELETED, {'meal': meal, 'cleared_days': cleared})
    for day in cleared:
        b.publish(PLAN_SLOT_CLEARED, {'day': day, 'meal': meal, 'reason': 'meal deleted'})


def publish_plan_updated(day: str, meal: Any = None, bus: Optional[EventBus] = None):
    _bus(bus).publish(PLAN_UPDATED, {'day': day, 'meal': meal})


def publish_shopping_generated(count: int, nothing_planned: bool, bus: Optional[EventBus] = None):
    _bus(bus).publish(SHOPPING_GENERATED, {'count': count, 'nothing_planned': nothing_planned})
