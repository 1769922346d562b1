"""Editor preference state.

One explicit object owned by the application context and handed to whatever
needs preferences. It composes the flag store, the observable flag registry,
the font size controller and the recent projects list, and keeps the few
remaining scalar settings (scope highlight strength, navigation view expanded,
project directory).

Threading model
---------------
- Construct and `initialize` on the UI thread.
- Plain getters/setters (`get_flag`, `set_flag`, `get_editor_font_size`,
  `set_editor_font_size`, `get_recent_projects`, `add_recent_project`, ...)
  may be called from any thread; they never block on the UI thread.
- Observable accessors (`flag_property`, `editor_font_size`,
  `stride_font_size_handle`, `get_style_declaration`,
  `scope_highlight_strength`) are UI-thread only.
- `EventBus` events are published from the UI thread only.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from pathlib import Path
from threading import RLock
from typing import Callable, List, Mapping

from prefsync.config import settings

from . import preference_keys as keys
from .event_bus import EventBus, PrefEvent
from .flag_registry import ObservableFlagRegistry
from .flag_store import FlagStore
from .font_sizes import FontSizeController
from .observable import DerivedString, ObservableValue
from .preference_backend import PreferenceBackend
from .recent_projects import RecentProjectsList
from .ui_dispatcher import UiDispatcher

_logger = logging.getLogger(__name__)

__all__ = ["PreferenceState", "is_raspberry_pi"]


def is_raspberry_pi() -> bool:
    machine = platform.machine().lower()
    return sys.platform.startswith("linux") and machine.startswith(("arm", "aarch64"))


class PreferenceState:
    def __init__(
        self,
        backend: PreferenceBackend,
        dispatcher: UiDispatcher,
        *,
        bus: EventBus | None = None,
        refresh_views: Callable[[], None] | None = None,
        is_bootstrap_project: Callable[[str], bool] | None = None,
        recent_capacity: int | None = None,
        is_macos: bool | None = None,
        flag_defaults: Mapping[str, bool] = keys.FLAG_DEFAULTS,
    ) -> None:
        dispatcher.check_ui_thread("PreferenceState")
        self.backend = backend
        self.dispatcher = dispatcher
        self.bus = bus
        self._flag_defaults = dict(flag_defaults)
        if refresh_views is None and bus is not None:
            refresh_views = lambda: bus.publish(PrefEvent.EDITOR_REFRESH_REQUESTED)  # noqa: E731

        self.flags = FlagStore(backend, dispatcher)
        self.flag_registry = ObservableFlagRegistry(self.flags, dispatcher)
        self.fonts = FontSizeController(
            backend, dispatcher, refresh_views=refresh_views, is_macos=is_macos
        )
        recent_kwargs = {}
        if is_bootstrap_project is not None:
            recent_kwargs["is_bootstrap_project"] = is_bootstrap_project
        self.recent = RecentProjectsList(backend, recent_capacity, **recent_kwargs)

        self._lock = RLock()
        self._highlight_strength = 0
        self._highlight_cell = ObservableValue(0)
        self._naviview_expanded = True
        self._project_directory = str(Path.home())
        self._initialized = False

    def initialize(self) -> None:
        """Read every preference from the backend. Call once, on the UI thread."""
        self.dispatcher.check_ui_thread("PreferenceState.initialize")
        if self._initialized:
            return
        backend = self.backend
        self.fonts.load()
        with self._lock:
            self._highlight_strength = backend.get_int(
                keys.SCOPE_HIGHLIGHT_STRENGTH, settings.DEFAULT_HIGHLIGHT_STRENGTH
            )
            self._naviview_expanded = keys.parse_flag(
                backend.get_string(keys.NAVIVIEW_EXPANDED, keys.to_flag_string(not is_raspberry_pi()))
            )
            self._project_directory = backend.get_string(keys.PROJECT_PATH, str(Path.home()))
        self._highlight_cell.set(self._highlight_strength)
        self.recent.load()
        self.flags.initialize(self._flag_defaults, lambda name: self._flag_defaults.get(name, False))
        if self.bus is not None:
            self._connect_bus(self.bus)
        self._initialized = True
        _logger.info("Preferences initialized (%d flags)", len(self._flag_defaults))

    def _connect_bus(self, bus: EventBus) -> None:
        self.flags.add_ui_listener(
            lambda name, value: bus.publish(PrefEvent.FLAG_CHANGED, {"name": name, "value": value})
        )
        self.fonts.add_font_listener(
            lambda size, family: bus.publish(
                PrefEvent.EDITOR_FONT_CHANGED, {"size": size, "family": family}
            )
        )
        self.recent.add_listener(
            lambda projects: self.dispatcher.run_now_or_later(
                lambda: bus.publish(PrefEvent.RECENT_PROJECTS_CHANGED, {"projects": projects})
            )
        )

    # Flags --------------------------------------------------------------------
    def get_flag(self, name: str) -> bool:
        return self.flags.get_flag(name)

    def set_flag(self, name: str, value: bool) -> None:
        self.flags.set_flag(name, value)

    def flag_property(self, name: str) -> ObservableValue:
        return self.flag_registry.flag_property(name)

    # Fonts --------------------------------------------------------------------
    def get_editor_font_size(self) -> int:
        return self.fonts.get_editor_font_size()

    def set_editor_font_size(self, size: int) -> None:
        self.fonts.set_editor_font_size(size)

    def editor_font_size(self) -> ObservableValue:
        return self.fonts.editor_font_size()

    def stride_font_size_handle(self) -> ObservableValue:
        return self.fonts.stride_font_size_handle()

    def get_style_declaration(self, include_family: bool) -> str:
        return self.fonts.get_style_declaration(include_family)

    def style_declaration(self, include_family: bool) -> DerivedString:
        return self.fonts.style_declaration(include_family)

    # Recent projects ----------------------------------------------------------
    def get_recent_projects(self) -> List[str]:
        return self.recent.get_recent_projects()

    def add_recent_project(self, path: str | os.PathLike[str]) -> None:
        self.recent.add_recent_project(path)

    # Scope highlighting ---------------------------------------------------------
    def get_scope_highlight_strength(self) -> int:
        with self._lock:
            return self._highlight_strength

    def scope_highlight_strength(self) -> ObservableValue:
        self.dispatcher.check_ui_thread("scope_highlight_strength")
        return self._highlight_cell

    def set_scope_highlight_strength(self, strength: int) -> None:
        with self._lock:
            self._highlight_strength = strength
            self.backend.put_int(keys.SCOPE_HIGHLIGHT_STRENGTH, strength)
        self.dispatcher.run_now_or_later(self._push_highlight_strength)

    def _push_highlight_strength(self) -> None:
        strength = self.get_scope_highlight_strength()
        if strength == self._highlight_cell.get():
            return
        self._highlight_cell.set(strength)
        if self.bus is not None:
            self.bus.publish(PrefEvent.HIGHLIGHT_STRENGTH_CHANGED, {"strength": strength})

    # Navigation view ----------------------------------------------------------
    def get_naviview_expanded(self) -> bool:
        with self._lock:
            return self._naviview_expanded

    def set_naviview_expanded(self, expanded: bool) -> None:
        with self._lock:
            self._naviview_expanded = bool(expanded)
            self.backend.put_string(keys.NAVIVIEW_EXPANDED, keys.to_flag_string(bool(expanded)))

    # Project directory --------------------------------------------------------
    def get_project_directory(self) -> Path:
        """Stored project directory, or the home directory if it no longer exists."""
        with self._lock:
            directory = Path(self._project_directory)
        if directory.is_dir():
            return directory
        return Path.home()

    def set_project_directory(self, directory: str | os.PathLike[str]) -> None:
        value = os.fspath(directory)
        with self._lock:
            self._project_directory = value
            self.backend.put_string(keys.PROJECT_PATH, value)
