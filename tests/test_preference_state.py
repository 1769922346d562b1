import threading
from pathlib import Path

from prefsync.config import settings
from prefsync.services import preference_keys as keys
from prefsync.services.event_bus import EventBus, PrefEvent
from prefsync.services.preference_backend import InMemoryPreferenceBackend
from prefsync.services.preference_state import PreferenceState


def _state(dispatcher, values=None, **kwargs):
    backend = InMemoryPreferenceBackend(keys.DEFAULT_PROPERTIES, values=values)
    state = PreferenceState(backend, dispatcher, is_macos=False, **kwargs)
    state.initialize()
    return state, backend


def test_initialize_loads_everything(dispatcher, tmp_path):
    values = {
        keys.EDITOR_FONT_SIZE: "15",
        keys.SCOPE_HIGHLIGHT_STRENGTH: "55",
        keys.NAVIVIEW_EXPANDED: "false",
        keys.PROJECT_PATH: str(tmp_path),
        keys.recent_project_key(0): "/recent",
        keys.SHOW_TEXT_EVAL: "true",
    }
    state, _ = _state(dispatcher, values)
    assert state.get_editor_font_size() == 15
    assert state.get_scope_highlight_strength() == 55
    assert state.scope_highlight_strength().get() == 55
    assert state.get_naviview_expanded() is False
    assert state.get_project_directory() == tmp_path
    assert state.get_recent_projects() == ["/recent"]
    assert state.get_flag(keys.SHOW_TEXT_EVAL) is True


def test_defaults_when_backend_has_no_user_values(prefs):
    assert prefs.get_scope_highlight_strength() == settings.DEFAULT_HIGHLIGHT_STRENGTH
    assert prefs.get_recent_projects() == []
    assert prefs.get_flag(keys.LINK_LIB) is True
    assert prefs.get_project_directory() == Path.home()


def test_missing_project_directory_falls_back_to_home(prefs, backend, tmp_path):
    gone = tmp_path / "deleted"
    prefs.set_project_directory(gone)
    assert backend.get_string(keys.PROJECT_PATH, "") == str(gone)
    assert prefs.get_project_directory() == Path.home()
    gone.mkdir()
    assert prefs.get_project_directory() == gone


def test_naviview_expanded_is_persisted(prefs, backend):
    prefs.set_naviview_expanded(False)
    assert prefs.get_naviview_expanded() is False
    assert backend.get_string(keys.NAVIVIEW_EXPANDED, "") == "false"


def test_highlight_strength_from_background_thread(prefs, backend, qtbot):
    cell = prefs.scope_highlight_strength()
    t = threading.Thread(target=prefs.set_scope_highlight_strength, args=(70,))
    t.start()
    t.join(timeout=5)
    assert prefs.get_scope_highlight_strength() == 70
    assert backend.get_int(keys.SCOPE_HIGHLIGHT_STRENGTH, 0) == 70
    qtbot.waitUntil(lambda: cell.get() == 70)


def test_events_published_on_changes(dispatcher):
    bus = EventBus()
    state, _ = _state(dispatcher, bus=bus)
    events = []
    for evt in PrefEvent:
        bus.subscribe(evt, lambda e: events.append((e.name, e.payload)))

    state.set_flag(keys.AUTO_INDENT, True)
    state.set_editor_font_size(13)
    state.add_recent_project("/proj")
    state.set_scope_highlight_strength(40)

    names = [name for name, _ in events]
    assert (PrefEvent.FLAG_CHANGED.value, {"name": keys.AUTO_INDENT, "value": True}) in events
    assert PrefEvent.EDITOR_FONT_CHANGED.value in names
    # default refresh collaborator publishes on the bus
    assert PrefEvent.EDITOR_REFRESH_REQUESTED.value in names
    assert PrefEvent.RECENT_PROJECTS_CHANGED.value in names
    assert (PrefEvent.HIGHLIGHT_STRENGTH_CHANGED.value, {"strength": 40}) in events
    assert bus.errors == []


def test_initialize_is_idempotent(prefs):
    prefs.set_flag(keys.AUTO_INDENT, True)
    prefs.initialize()
    assert prefs.get_flag(keys.AUTO_INDENT) is True
