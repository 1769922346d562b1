"""Preference change EventBus.

Lightweight synchronous publish/subscribe used to announce preference changes
to the rest of the editor (menus, views, the status bar).

Goals:
 - Decouple the preference state from its consumers
 - Provide minimal, testable surface (no Qt dependency)
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - Allow one-shot (once) subscriptions

`PreferenceState` only publishes from the UI thread, so handlers may touch
observable cells directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "PrefEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class PrefEvent(str, Enum):
    FLAG_CHANGED = "flag_changed"
    EDITOR_FONT_CHANGED = "editor_font_changed"
    EDITOR_REFRESH_REQUESTED = "editor_refresh_requested"
    RECENT_PROJECTS_CHANGED = "recent_projects_changed"
    HIGHLIGHT_STRENGTH_CHANGED = "highlight_strength_changed"


@dataclass
class Event:
    name: str  # matches PrefEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Synchronous event dispatcher.

    Thread-safety: the subscription table is guarded by a re-entrant lock.
    Handlers are invoked while the lock is NOT held (copy-first strategy) so
    handlers can subscribe/unsubscribe recursively without deadlock.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | PrefEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = name.value if isinstance(name, PrefEvent) else name
        sub = Subscription(event=key, handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def publish(self, name: str | PrefEvent, payload: Any = None) -> Event:
        key = name.value if isinstance(name, PrefEvent) else name
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished_once: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - capture any handler failure
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished_once.append(sub)
        for sub in finished_once:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | PrefEvent) -> int:
        key = name.value if isinstance(name, PrefEvent) else name
        with self._lock:
            return len(self._subs.get(key, ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
