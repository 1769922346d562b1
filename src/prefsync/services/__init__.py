"""Service layer exports.

Responsibilities:
 - Preference backends (plain, JSON file, QSettings)
 - UI-domain dispatch and observable cells
 - Flag store, observable flag registry, font sizes, recent projects
 - `PreferenceState`, the object the rest of the editor holds on to
 - EventBus publish/subscribe core
"""

from .event_bus import EventBus, PrefEvent  # noqa: F401
from .flag_registry import ObservableFlagRegistry  # noqa: F401
from .flag_store import FlagStore  # noqa: F401
from .font_sizes import FontSizeController  # noqa: F401
from .observable import DerivedString, ObservableValue  # noqa: F401
from .preference_backend import (  # noqa: F401
    InMemoryPreferenceBackend,
    JsonFilePreferenceBackend,
    PreferenceBackend,
)
from .preference_state import PreferenceState  # noqa: F401
from .recent_projects import RecentProjectsList  # noqa: F401
from .ui_dispatcher import UiDispatcher  # noqa: F401

__all__ = [
    "EventBus",
    "PrefEvent",
    "ObservableFlagRegistry",
    "FlagStore",
    "FontSizeController",
    "DerivedString",
    "ObservableValue",
    "InMemoryPreferenceBackend",
    "JsonFilePreferenceBackend",
    "PreferenceBackend",
    "PreferenceState",
    "RecentProjectsList",
    "UiDispatcher",
]
