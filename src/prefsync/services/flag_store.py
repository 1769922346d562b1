"""Flag store: named boolean preferences readable and writable from any thread.

Persistence follows a diff-to-default policy: a flag is stored in the backend
only while its value differs from the backend's compiled default, otherwise
the stored override is removed so the backend reads the default again.

Thread-safety: one coarse lock guards the in-memory map. `set_flag` performs
the backend write inside the lock so two writers of the same flag cannot
interleave their write and map update. UI listeners are notified afterwards,
on the UI thread.
"""

from __future__ import annotations

import logging
from functools import partial
from threading import RLock
from typing import Callable, Dict, Iterable, List

from .preference_backend import PreferenceBackend
from .preference_keys import flag_default, parse_flag, to_flag_string
from .ui_dispatcher import UiDispatcher

_logger = logging.getLogger(__name__)

__all__ = ["FlagStore", "FlagListener"]

FlagListener = Callable[[str, bool], None]


class FlagStore:
    def __init__(self, backend: PreferenceBackend, dispatcher: UiDispatcher) -> None:
        self._backend = backend
        self._dispatcher = dispatcher
        self._lock = RLock()
        self._flags: Dict[str, bool] = {}
        self._ui_listeners: List[FlagListener] = []

    def initialize(
        self, names: Iterable[str], default_of: Callable[[str], bool] = flag_default
    ) -> None:
        """Load each named flag from the backend, falling back to `default_of`."""
        with self._lock:
            for name in names:
                raw = self._backend.get_string(name, to_flag_string(default_of(name)))
                self._flags[name] = parse_flag(raw)
            count = len(self._flags)
        _logger.info("Loaded %d flags", count)

    def get_flag(self, name: str) -> bool:
        """Unknown flags read as off."""
        with self._lock:
            return self._flags.get(name, False)

    def set_flag(self, name: str, value: bool) -> None:
        value = bool(value)
        with self._lock:
            system_default = self._backend.get_default_string(name, "")
            if system_default and parse_flag(system_default) == value:
                self._backend.remove_key(name)
                _logger.debug("Flag %s back at default %s; override removed", name, value)
            else:
                self._backend.put_string(name, to_flag_string(value))
                _logger.debug("Flag %s persisted as %s", name, value)
            self._flags[name] = value
        self._dispatcher.run_now_or_later(partial(self._notify_ui, name))

    def known_flags(self) -> List[str]:
        with self._lock:
            return list(self._flags)

    def snapshot(self) -> Dict[str, bool]:
        with self._lock:
            return dict(self._flags)

    # UI side ----------------------------------------------------------------
    def add_ui_listener(self, listener: FlagListener) -> None:
        """Register `listener(name, value)`; called on the UI thread after each set."""
        self._dispatcher.check_ui_thread("FlagStore.add_ui_listener")
        self._ui_listeners.append(listener)

    def _notify_ui(self, name: str) -> None:
        # Read back rather than capture so late tasks from other threads cannot
        # leave listeners on a stale value.
        value = self.get_flag(name)
        for listener in list(self._ui_listeners):
            listener(name, value)
