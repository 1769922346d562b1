import json

import pytest

from prefsync.app import create_app_context, open_backend
from prefsync.services import preference_keys as keys
from prefsync.services.preference_backend import (
    InMemoryPreferenceBackend,
    JsonFilePreferenceBackend,
)
from prefsync.services.qsettings_backend import QSettingsPreferenceBackend


def test_create_app_context_with_json_store(qapp, tmp_path):
    ctx = create_app_context(data_dir=str(tmp_path), is_macos=False)
    assert ctx.qt_app is not None
    assert isinstance(ctx.backend, JsonFilePreferenceBackend)
    assert ctx.metadata["recent_capacity"] == 12
    ctx.preferences.set_flag(keys.HIGHLIGHTING, False)
    data = json.loads((tmp_path / "user_prefs.json").read_text(encoding="utf-8"))
    assert data["values"][keys.HIGHLIGHTING] == "false"

    reopened = create_app_context(data_dir=str(tmp_path), is_macos=False)
    assert reopened.preferences.get_flag(keys.HIGHLIGHTING) is False


def test_create_app_context_with_explicit_backend(qapp):
    backend = InMemoryPreferenceBackend(keys.DEFAULT_PROPERTIES)
    refreshes = []
    ctx = create_app_context(backend=backend, refresh_views=lambda: refreshes.append(1))
    ctx.preferences.set_editor_font_size(30)
    assert refreshes == [1]
    assert ctx.backend is backend


def test_open_backend_kinds(qapp, tmp_path):
    assert isinstance(open_backend("memory"), InMemoryPreferenceBackend)
    assert isinstance(open_backend("qsettings", data_dir=str(tmp_path)), QSettingsPreferenceBackend)
    assert isinstance(open_backend("json", data_dir=str(tmp_path)), JsonFilePreferenceBackend)
    with pytest.raises(ValueError):
        open_backend("yaml")  # type: ignore[arg-type]
