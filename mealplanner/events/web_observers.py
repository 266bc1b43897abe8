"""Web-facing observer for catalog and plan events.

EventFeed subscribes to an EventBus and keeps a ring buffer of recent
events that the web layer exposes at /api/events, so a page can refresh
its plan or shopping list without a full reload.

Design:
  * Each event gets an auto-increment integer id (cursor); clients poll
    with since=<last_id_seen> and only receive newer events.
  * A Lock guards the buffer because uvicorn runs sync routes in a thread pool.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import ALL_EVENTS, EventBus
from mealplanner.utilities.constants import MAX_EVENTS


class EventFeed:
    def __init__(self, max_events: int = MAX_EVENTS):
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self._max_events = max_events
        self._bus: Optional[EventBus] = None

    def _record(self, event_name: str, payload: Any):  # signature expected by EventBus
        with self._lock:
            evt = {
                'id': self._next_id,
                'type': event_name,
                'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
            }
            # Flatten the fields the UI needs
            if isinstance(payload, dict):
                meal = payload.get('meal')
                if meal is not None and hasattr(meal, 'name'):
                    evt['meal_id'] = getattr(meal, 'id', '')
                    evt['meal'] = meal.name
                for k in ('day', 'days', 'cleared_days', 'reason', 'count', 'nothing_planned'):
                    if k in payload:
                        evt[k] = payload[k]
            self._events.append(evt)
            self._next_id += 1
            if len(self._events) > self._max_events:
                del self._events[: len(self._events) - self._max_events]

    def start(self, bus: EventBus) -> "EventFeed":
        """Idempotent start: subscribe to every catalog/plan event once."""
        if self._bus is bus:
            return self
        for name in ALL_EVENTS:
            bus.subscribe(name, self._record)
        self._bus = bus
        return self

    def stop(self):
        if self._bus is None:
            return
        for name in ALL_EVENTS:
            self._bus.unsubscribe(name, self._record)
        self._bus = None

    def get_events(self, since: Optional[int] = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive), plus next_cursor for the next poll."""
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['EventFeed']
