"""Simple Event Bus / Observer implementation for catalog and plan changes.

Event names:
  meal.added -> payload {"meal": Meal}
  meal.updated -> payload {"meal": Meal, "days": [day, ...]}
  meal.deleted -> payload {"meal": Meal, "cleared_days": [day, ...]}
  plan.updated -> payload {"day": str, "meal": Meal | None}
  plan.slot_cleared -> payload {"day": str, "meal": Meal, "reason": str}
  shopping.generated -> payload {"count": int, "nothing_planned": bool}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
MEAL_ADDED = "meal.added"
MEAL_UPDATED = "meal.updated"
MEAL_DELETED = "meal.deleted"
PLAN_UPDATED = "plan.updated"
PLAN_SLOT_CLEARED = "plan.slot_cleared"
SHOPPING_GENERATED = "shopping.generated"

ALL_EVENTS = (MEAL_ADDED, MEAL_UPDATED, MEAL_DELETED, PLAN_UPDATED, PLAN_SLOT_CLEARED, SHOPPING_GENERATED)


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		# A failing subscriber must not undo or interrupt the change that triggered the event.
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'ALL_EVENTS',
	'MEAL_ADDED', 'MEAL_UPDATED', 'MEAL_DELETED',
	'PLAN_UPDATED', 'PLAN_SLOT_CLEARED', 'SHOPPING_GENERATED'
]
