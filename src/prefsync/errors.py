"""Exception types raised by prefsync."""

from __future__ import annotations

__all__ = ["PrefsyncError", "WrongThreadError"]


class PrefsyncError(RuntimeError):
    """Base class for prefsync failures."""


class WrongThreadError(PrefsyncError):
    """Raised when a UI-domain operation is invoked from another thread."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"'{operation}' must be called on the UI thread")
        self.operation = operation
