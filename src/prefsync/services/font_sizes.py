"""Editor and Stride font size settings.

The editor font size is mirrored twice: a plain int guarded by a lock (any
thread may read or set it) and an `ObservableValue` owned by the UI thread.
`set_editor_font_size` updates the mirror and the backend synchronously and
pushes the new size and font family to the UI cells asynchronously.

The Stride font size exists only as a UI cell created on first request. Its
load path clamps to [MIN_FONT_SIZE, MAX_FONT_SIZE]; later sets are persisted
as given.
"""

from __future__ import annotations

import logging
import sys
from threading import RLock
from typing import Callable, Optional, Tuple

from prefsync.config import settings

from . import preference_keys as keys
from .observable import DerivedString, ObservableValue
from .preference_backend import PreferenceBackend
from .ui_dispatcher import UiDispatcher

_logger = logging.getLogger(__name__)

__all__ = ["FontSizeController", "clamp_font_size", "size_declaration", "full_declaration"]

FontChangeListener = Callable[[int, str], None]


def clamp_font_size(size: int) -> int:
    return max(settings.MIN_FONT_SIZE, min(settings.MAX_FONT_SIZE, size))


def size_declaration(size: int) -> str:
    return f"font-size: {size}pt;"


def full_declaration(size: int, family: str) -> str:
    return f'font-size: {size}pt; font-family: "{family}";'


class FontSizeController:
    """Owns the editor/Stride font size state.

    Must be constructed on the UI thread: the editor cells are created eagerly.

    Parameters
    ----------
    backend: Preference store used for every read and write.
    dispatcher: UI-domain dispatcher.
    refresh_views: Called on the UI thread after the editor size changes.
    is_macos: Selects the font family key; defaults to the running platform.
    """

    def __init__(
        self,
        backend: PreferenceBackend,
        dispatcher: UiDispatcher,
        *,
        refresh_views: Callable[[], None] | None = None,
        is_macos: bool | None = None,
    ) -> None:
        dispatcher.check_ui_thread("FontSizeController")
        self._backend = backend
        self._dispatcher = dispatcher
        self._refresh_views = refresh_views
        self._is_macos = sys.platform == "darwin" if is_macos is None else is_macos
        self._lock = RLock()
        self._size = settings.INITIAL_EDITOR_FONT_SIZE
        self._family = settings.DEFAULT_FONT_FAMILY
        self._size_cell = ObservableValue(self._size)
        self._family_cell = ObservableValue(self._family)
        self._stride_cell: Optional[ObservableValue] = None
        self._styles: Optional[Tuple[DerivedString, DerivedString]] = None
        self._listeners: list[FontChangeListener] = []

    def load(self) -> None:
        """Read the persisted editor size; startup only, does not refresh views."""
        size = self._backend.get_int(keys.EDITOR_FONT_SIZE, settings.DEFAULT_EDITOR_FONT_SIZE)
        with self._lock:
            if size > 0:
                self._size = size
            self._family = self._resolve_family()
        self._dispatcher.run_now_or_later(self._push_to_ui)
        _logger.info("Editor font: %dpt %s", self._size, self._family)

    # Editor font (any thread) ------------------------------------------------
    def get_editor_font_size(self) -> int:
        with self._lock:
            return self._size

    def get_font_family(self) -> str:
        with self._lock:
            return self._family

    def set_editor_font_size(self, size: int) -> None:
        if size <= 0:
            return
        with self._lock:
            if size == self._size:
                return
            self._size = size
            self._backend.put_int(keys.EDITOR_FONT_SIZE, size)
            self._family = self._resolve_family()
        _logger.debug("Editor font size set to %d", size)
        self._dispatcher.run_now_or_later(self._after_editor_change)

    def _resolve_family(self) -> str:
        key = keys.EDITOR_MAC_FONT if self._is_macos else keys.EDITOR_FONT
        return self._backend.get_string(key, settings.DEFAULT_FONT_FAMILY)

    # UI thread ---------------------------------------------------------------
    def editor_font_size(self) -> ObservableValue:
        self._dispatcher.check_ui_thread("editor_font_size")
        return self._size_cell

    def font_family(self) -> ObservableValue:
        self._dispatcher.check_ui_thread("font_family")
        return self._family_cell

    def add_font_listener(self, listener: FontChangeListener) -> None:
        """Register `listener(size, family)`; called on the UI thread after each change."""
        self._dispatcher.check_ui_thread("add_font_listener")
        self._listeners.append(listener)

    def stride_font_size_handle(self) -> ObservableValue:
        self._dispatcher.check_ui_thread("stride_font_size_handle")
        if self._stride_cell is None:
            raw = self._backend.get_int(keys.STRIDE_FONT_SIZE, settings.DEFAULT_STRIDE_FONT_SIZE)
            size = clamp_font_size(raw)
            if size != raw:
                _logger.debug("Stride font size %d out of range; using %d", raw, size)
            cell = ObservableValue(size)
            cell.subscribe(self._persist_stride_size)
            self._stride_cell = cell
        return self._stride_cell

    def _persist_stride_size(self, size: int) -> None:
        self._backend.put_int(keys.STRIDE_FONT_SIZE, int(size))

    def get_style_declaration(self, include_family: bool) -> str:
        self._dispatcher.check_ui_thread("get_style_declaration")
        return self.style_declaration(include_family).get()

    def style_declaration(self, include_family: bool) -> DerivedString:
        """Live style declaration cell; both variants are built on first use."""
        self._dispatcher.check_ui_thread("style_declaration")
        if self._styles is None:
            size_cell, family_cell = self._size_cell, self._family_cell
            full = DerivedString(
                lambda: full_declaration(size_cell.get(), family_cell.get()), size_cell, family_cell
            )
            size_only = DerivedString(lambda: size_declaration(size_cell.get()), size_cell)
            self._styles = (full, size_only)
        return self._styles[0] if include_family else self._styles[1]

    def _push_to_ui(self) -> None:
        with self._lock:
            size, family = self._size, self._family
        self._size_cell.set(size)
        self._family_cell.set(family)

    def _after_editor_change(self) -> None:
        self._push_to_ui()
        size, family = self._size_cell.get(), self._family_cell.get()
        for listener in list(self._listeners):
            listener(size, family)
        if self._refresh_views is not None:
            self._refresh_views()
