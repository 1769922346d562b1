"""Thread-affine preference and flag synchronization.

Holds runtime editor preferences (boolean flags, font sizes, recent projects)
that are read and written from any thread while being observed from the Qt UI
thread. See `prefsync.app.create_app_context` for the usual entry point.
"""

from .errors import PrefsyncError, WrongThreadError  # noqa: F401

__all__ = ["PrefsyncError", "WrongThreadError"]
