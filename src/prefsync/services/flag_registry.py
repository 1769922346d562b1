"""Observable flag handles.

At most one `ObservableValue` exists per flag name; every caller asking for the
same flag gets the same instance. Handles are created lazily on the UI thread,
seeded from the flag store, and updated on the UI thread after `set_flag`.
"""

from __future__ import annotations

import logging
from typing import Dict

from .flag_store import FlagStore
from .observable import ObservableValue
from .ui_dispatcher import UiDispatcher

_logger = logging.getLogger(__name__)

__all__ = ["ObservableFlagRegistry"]


class ObservableFlagRegistry:
    def __init__(self, store: FlagStore, dispatcher: UiDispatcher) -> None:
        self._store = store
        self._dispatcher = dispatcher
        # UI thread only; no lock needed.
        self._handles: Dict[str, ObservableValue] = {}
        store.add_ui_listener(self._on_flag_changed)

    def flag_property(self, name: str) -> ObservableValue:
        self._dispatcher.check_ui_thread("flag_property")
        handle = self._handles.get(name)
        if handle is None:
            handle = ObservableValue(self._store.get_flag(name))
            self._handles[name] = handle
            _logger.debug("Created observable handle for flag %s", name)
        return handle

    def has_handle(self, name: str) -> bool:
        return name in self._handles

    def _on_flag_changed(self, name: str, value: bool) -> None:
        handle = self._handles.get(name)
        if handle is not None:
            handle.set(value)
