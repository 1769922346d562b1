"""UI-domain dispatcher.

The thread that constructs the `UiDispatcher` is the UI domain. Any thread may
`post` work to it; posted callables travel through a queued Qt signal and run
in FIFO order (per posting thread) once the UI thread's event loop processes
events. Nothing waits for a posted task to finish.

UI-only operations call `check_ui_thread` which raises `WrongThreadError` off
the UI thread (skipped under ``python -O``).
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from PyQt6.QtCore import QObject, Qt, pyqtSignal, pyqtSlot

from prefsync.errors import WrongThreadError

_logger = logging.getLogger(__name__)

__all__ = ["UiDispatcher"]


class UiDispatcher(QObject):
    _posted = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._ui_ident = threading.get_ident()
        self._posted.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def is_ui_thread(self) -> bool:
        return threading.get_ident() == self._ui_ident

    def check_ui_thread(self, operation: str) -> None:
        if __debug__ and not self.is_ui_thread():
            raise WrongThreadError(operation)

    def post(self, task: Callable[[], None]) -> None:
        """Queue `task` for the UI thread, even when already on it."""
        self._posted.emit(task)

    def run_now_or_later(self, task: Callable[[], None]) -> None:
        if self.is_ui_thread():
            task()
        else:
            self.post(task)

    @pyqtSlot(object)
    def _run(self, task: Callable[[], None]) -> None:
        try:
            task()
        except Exception:  # noqa: BLE001 - never let a task escape into the event loop
            _logger.exception("UI task %r failed", task)
