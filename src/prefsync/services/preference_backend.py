"""Preference backend contract and the plain-Python stores.

A backend keeps two layers:

- user values: what `put_*` writes and `remove_key` deletes
- compiled defaults: a read-only table supplied at construction

`get_string` / `get_int` read the user value, then the compiled default, then
the caller's fallback. `get_default_string` consults only the compiled table,
which is what diff-to-default persistence compares against.

Design principles (shared with the rest of the service layer):
- Pure logic (no Qt import) so stores can be unit-tested headless.
- I/O errors from `put_*` / `remove_key` propagate to the caller.
- Graceful fallback on load: a corrupt JSON file yields an empty store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import RLock
from typing import Dict, Mapping, Optional, Protocol, runtime_checkable

_logger = logging.getLogger(__name__)

__all__ = [
    "PreferenceBackend",
    "InMemoryPreferenceBackend",
    "JsonFilePreferenceBackend",
    "parse_int",
]


@runtime_checkable
class PreferenceBackend(Protocol):
    def get_string(self, key: str, default: str) -> str: ...  # pragma: no cover

    def put_string(self, key: str, value: str) -> None: ...  # pragma: no cover

    def remove_key(self, key: str) -> None: ...  # pragma: no cover

    def get_int(self, key: str, default: int) -> int: ...  # pragma: no cover

    def put_int(self, key: str, value: int) -> None: ...  # pragma: no cover

    def get_default_string(self, key: str, fallback: str) -> str: ...  # pragma: no cover


def parse_int(text: Optional[str], default: int) -> int:
    if text is None:
        return default
    try:
        return int(text.strip())
    except ValueError:
        return default


class InMemoryPreferenceBackend:
    """Dictionary-backed store.

    Also the base for `JsonFilePreferenceBackend`; subclasses hook `_flush`
    to persist after every mutation.
    """

    def __init__(
        self,
        defaults: Mapping[str, str] | None = None,
        values: Mapping[str, str] | None = None,
    ) -> None:
        self._lock = RLock()
        self._defaults: Dict[str, str] = dict(defaults or {})
        self._values: Dict[str, str] = dict(values or {})

    # Reads ----------------------------------------------------------------
    def get_string(self, key: str, default: str) -> str:
        with self._lock:
            if key in self._values:
                return self._values[key]
            return self._defaults.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        with self._lock:
            raw = self._values.get(key, self._defaults.get(key))
        return parse_int(raw, default)

    def get_default_string(self, key: str, fallback: str) -> str:
        return self._defaults.get(key, fallback)

    # Writes ---------------------------------------------------------------
    def put_string(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value
            self._flush()

    def put_int(self, key: str, value: int) -> None:
        self.put_string(key, str(int(value)))

    def remove_key(self, key: str) -> None:
        with self._lock:
            if self._values.pop(key, None) is not None:
                self._flush()

    # Introspection ----------------------------------------------------------
    def has_user_value(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def user_values(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._values)

    def _flush(self) -> None:
        """Persist user values; no-op for the in-memory store."""


class JsonFilePreferenceBackend(InMemoryPreferenceBackend):
    """User values persisted to a JSON file, rewritten on every mutation.

    File layout: ``{"version": 1, "values": {key: string}}``.
    """

    VERSION = 1

    def __init__(self, path: str | Path, defaults: Mapping[str, str] | None = None) -> None:
        self.path = Path(path)
        super().__init__(defaults=defaults, values=self._load(self.path))

    @classmethod
    def _load(cls, path: Path) -> Dict[str, str]:
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            _logger.warning("Ignoring unreadable preference file %s: %s", path, exc)
            return {}
        values = data.get("values") if isinstance(data, dict) else None
        if not isinstance(values, dict):
            _logger.warning("Ignoring preference file %s with unexpected layout", path)
            return {}
        return {str(k): str(v) for k, v in values.items()}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        payload = {"version": self.VERSION, "values": self._values}
        tmp.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True), encoding="utf-8"
        )
        tmp.replace(self.path)
        _logger.debug("Wrote %d preference values to %s", len(self._values), self.path)
