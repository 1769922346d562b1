"""QSettings-backed preference store.

Stores user values through `QSettings` (native registry / plist / ini file
depending on platform, or an explicit ini path). Compiled defaults are kept in
memory exactly as for the plain stores. Values are written as strings so that
every platform format round-trips the same text.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, Mapping, Optional

from PyQt6.QtCore import QSettings

from .preference_backend import parse_int

_logger = logging.getLogger(__name__)

__all__ = ["QSettingsPreferenceBackend"]


class QSettingsPreferenceBackend:
    def __init__(
        self,
        settings: QSettings | None = None,
        defaults: Mapping[str, str] | None = None,
        *,
        organization: str = "prefsync",
        application: str = "prefsync",
    ) -> None:
        self._settings = settings if settings is not None else QSettings(organization, application)
        self._defaults: Dict[str, str] = dict(defaults or {})
        # A single QSettings object must not be used from two threads at once.
        self._lock = RLock()

    @classmethod
    def from_ini(cls, path: str, defaults: Mapping[str, str] | None = None) -> "QSettingsPreferenceBackend":
        return cls(QSettings(path, QSettings.Format.IniFormat), defaults)

    def _user_value(self, key: str) -> Optional[str]:
        with self._lock:
            if not self._settings.contains(key):
                return None
            raw = self._settings.value(key)
        return None if raw is None else str(raw)

    def get_string(self, key: str, default: str) -> str:
        value = self._user_value(key)
        if value is not None:
            return value
        return self._defaults.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        value = self._user_value(key)
        return parse_int(value if value is not None else self._defaults.get(key), default)

    def get_default_string(self, key: str, fallback: str) -> str:
        return self._defaults.get(key, fallback)

    def put_string(self, key: str, value: str) -> None:
        with self._lock:
            self._settings.setValue(key, value)
            self._settings.sync()
        _logger.debug("QSettings put %s=%r", key, value)

    def put_int(self, key: str, value: int) -> None:
        self.put_string(key, str(int(value)))

    def remove_key(self, key: str) -> None:
        with self._lock:
            self._settings.remove(key)
            self._settings.sync()
        _logger.debug("QSettings removed %s", key)
