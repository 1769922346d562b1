"""Observable value cells.

`ObservableValue` holds a current value and notifies subscribers through a Qt
signal whenever `set` changes it. Cells live on the UI thread, so subscribers
connected there are called synchronously (direct connection).

`DerivedString` recomputes a string from other cells whenever one of them
changes. It is the only derived value in the subsystem (the editor style
declarations).
"""

from __future__ import annotations

from typing import Any, Callable

from PyQt6.QtCore import QObject, pyqtSignal

__all__ = ["ObservableValue", "DerivedString"]


class ObservableValue(QObject):
    changed = pyqtSignal(object)

    def __init__(self, initial: Any, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._value = initial

    def get(self) -> Any:
        return self._value

    def set(self, value: Any) -> None:
        if value == self._value:
            return
        self._value = value
        self.changed.emit(value)

    def subscribe(self, handler: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """Call `handler(new_value)` after every change; returns the handler."""
        self.changed.connect(handler)
        return handler

    def unsubscribe(self, handler: Callable[[Any], Any]) -> None:
        self.changed.disconnect(handler)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class DerivedString(ObservableValue):
    def __init__(self, compute: Callable[[], str], *sources: ObservableValue) -> None:
        super().__init__(compute())
        self._compute = compute
        for source in sources:
            source.changed.connect(self._recompute)

    def _recompute(self, _value: object = None) -> None:
        super().set(self._compute())

    def set(self, value: str) -> None:  # type: ignore[override]
        raise AttributeError("DerivedString is read-only")
