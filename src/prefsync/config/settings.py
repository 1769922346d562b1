"""Global configuration and constants for the preference subsystem."""

from __future__ import annotations

import os
from typing import Final

DATA_DIR: Final = os.environ.get("PREFSYNC_DATA_DIR", "data")
PREFS_FILENAME: Final = os.environ.get("PREFSYNC_PREFS_FILENAME", "user_prefs.json")

DEFAULT_RECENT_CAPACITY: Final = 12

# Font sizes are in points
MIN_FONT_SIZE: Final = 6
MAX_FONT_SIZE: Final = 160
DEFAULT_STRIDE_FONT_SIZE: Final = 11
DEFAULT_EDITOR_FONT_SIZE: Final = 12
INITIAL_EDITOR_FONT_SIZE: Final = 10  # value before the persisted size is loaded
DEFAULT_FONT_FAMILY: Final = "Roboto Mono"

DEFAULT_HIGHLIGHT_STRENGTH: Final = 20
