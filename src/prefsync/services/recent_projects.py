"""Recent projects list.

Maintains a fixed-size MRU (most recently used) list of project paths.
Re-opening a project moves it to the front; the oldest entry falls off when
the list is full. The whole list is written to the backend under positional
keys (``recentProject0`` .. ``recentProject{len-1}``) after every add.

Keys at positions >= the current length are never cleared, so entries written
by an earlier, longer list (e.g. before the capacity was lowered) stay in the
backend.
"""

from __future__ import annotations

import logging
import os
from threading import RLock
from typing import Callable, List

from prefsync.config import settings

from . import preference_keys as keys
from .preference_backend import PreferenceBackend

_logger = logging.getLogger(__name__)

__all__ = ["RecentProjectsList"]


def _never_bootstrap(_path: str) -> bool:
    return False


class RecentProjectsList:
    def __init__(
        self,
        backend: PreferenceBackend,
        capacity: int | None = None,
        *,
        is_bootstrap_project: Callable[[str], bool] = _never_bootstrap,
    ) -> None:
        self._backend = backend
        if capacity is None:
            capacity = backend.get_int(keys.RECENT_CAPACITY, settings.DEFAULT_RECENT_CAPACITY)
            if capacity <= 0:
                _logger.warning(
                    "Stored recent project capacity %d is not positive; using %d",
                    capacity,
                    settings.DEFAULT_RECENT_CAPACITY,
                )
                capacity = settings.DEFAULT_RECENT_CAPACITY
        elif capacity <= 0:
            raise ValueError(f"Recent project capacity must be positive: {capacity}")
        self.capacity = capacity
        self._is_bootstrap_project = is_bootstrap_project
        self._lock = RLock()
        self._projects: List[str] = []  # MRU order
        self._listeners: List[Callable[[List[str]], None]] = []

    def load(self) -> None:
        projects: List[str] = []
        for i in range(self.capacity):
            path = self._backend.get_string(keys.recent_project_key(i), "")
            if path and path not in projects:
                projects.append(path)
        with self._lock:
            self._projects = projects
        _logger.info("Loaded %d recent projects", len(projects))

    def get_recent_projects(self) -> List[str]:
        with self._lock:
            return list(self._projects)

    def add_recent_project(self, path: str | os.PathLike[str]) -> None:
        project = os.path.abspath(os.fspath(path))
        if self._is_bootstrap_project(project):
            return
        with self._lock:
            try:
                self._projects.remove(project)
            except ValueError:
                pass
            self._projects.insert(0, project)
            if len(self._projects) > self.capacity:
                del self._projects[self.capacity :]
            for i, entry in enumerate(self._projects):
                self._backend.put_string(keys.recent_project_key(i), entry)
            current = list(self._projects)
            listeners = list(self._listeners)
        _logger.debug("Recent projects now %s", current)
        for listener in listeners:
            listener(current)

    def add_listener(self, listener: Callable[[List[str]], None]) -> None:
        """Register `listener(projects)`; called on the adding thread after each add."""
        with self._lock:
            self._listeners.append(listener)
