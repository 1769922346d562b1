"""Application bootstrap for the preference subsystem.

Responsibilities:
 - Ensure a Qt core application exists (the UI dispatcher needs an event loop)
 - Pick and open the preference backend (JSON file, QSettings or in-memory)
 - Create the UI dispatcher on the calling thread, which becomes the UI domain
 - Build and initialize the single `PreferenceState`
 - Return one context object holding references to all of it

Call `create_app_context` from the thread that will run the Qt event loop.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Mapping, Optional

from PyQt6.QtCore import QCoreApplication

from prefsync.config import settings
from prefsync.services.event_bus import EventBus
from prefsync.services.preference_backend import (
    InMemoryPreferenceBackend,
    JsonFilePreferenceBackend,
    PreferenceBackend,
)
from prefsync.services.preference_keys import DEFAULT_PROPERTIES
from prefsync.services.preference_state import PreferenceState
from prefsync.services.qsettings_backend import QSettingsPreferenceBackend
from prefsync.services.ui_dispatcher import UiDispatcher

_logger = logging.getLogger(__name__)

__all__ = ["AppContext", "create_app_context", "open_backend", "StoreKind"]

StoreKind = Literal["json", "qsettings", "memory"]


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The Qt application instance driving the UI event loop
    backend: Preference backend shared by every component
    dispatcher: UI-domain dispatcher (lives on the bootstrap thread)
    event_bus: Bus on which preference changes are announced
    preferences: The initialized preference state
    started_at: Monotonic timestamp when bootstrap started
    duration_s: Total elapsed seconds for bootstrap
    metadata: Free-form diagnostics
    """

    qt_app: Any
    backend: PreferenceBackend
    dispatcher: UiDispatcher
    event_bus: EventBus
    preferences: PreferenceState
    started_at: float
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def open_backend(
    store: StoreKind = "json",
    *,
    data_dir: str | None = None,
    defaults: Mapping[str, str] = DEFAULT_PROPERTIES,
) -> PreferenceBackend:
    if store == "memory":
        return InMemoryPreferenceBackend(defaults)
    if store == "qsettings":
        if data_dir:
            return QSettingsPreferenceBackend.from_ini(
                os.path.join(data_dir, "prefsync.ini"), defaults
            )
        return QSettingsPreferenceBackend(defaults=defaults)
    if store == "json":
        base = data_dir or settings.DATA_DIR
        return JsonFilePreferenceBackend(os.path.join(base, settings.PREFS_FILENAME), defaults)
    raise ValueError(f"Unknown preference store: {store}")


def create_app_context(
    *,
    backend: PreferenceBackend | None = None,
    store: StoreKind = "json",
    data_dir: str | None = None,
    is_bootstrap_project: Callable[[str], bool] | None = None,
    refresh_views: Callable[[], None] | None = None,
    recent_capacity: int | None = None,
    is_macos: bool | None = None,
) -> AppContext:
    """Create the Qt app (if needed), backend and preference state.

    Parameters
    ----------
    backend: Explicit backend; when None one is opened from `store`/`data_dir`.
    is_bootstrap_project: Predicate for projects never listed as recent.
    refresh_views: View refresh hook; defaults to publishing on the event bus.
    """
    started = time.perf_counter()
    qt_app: Optional[QCoreApplication] = QCoreApplication.instance()
    if qt_app is None:
        qt_app = QCoreApplication(sys.argv[:1])
    if backend is None:
        backend = open_backend(store, data_dir=data_dir)
    dispatcher = UiDispatcher()
    bus = EventBus()
    prefs = PreferenceState(
        backend,
        dispatcher,
        bus=bus,
        refresh_views=refresh_views,
        is_bootstrap_project=is_bootstrap_project,
        recent_capacity=recent_capacity,
        is_macos=is_macos,
    )
    prefs.initialize()
    duration = time.perf_counter() - started
    _logger.info("Preference bootstrap finished in %.1f ms", duration * 1000.0)
    return AppContext(
        qt_app=qt_app,
        backend=backend,
        dispatcher=dispatcher,
        event_bus=bus,
        preferences=prefs,
        started_at=started,
        duration_s=duration,
        metadata={"backend": type(backend).__name__, "recent_capacity": prefs.recent.capacity},
    )
