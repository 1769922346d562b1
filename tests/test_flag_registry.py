import threading

from prefsync.errors import WrongThreadError
from prefsync.services import preference_keys as keys


def test_flag_property_is_identity_stable(prefs):
    first = prefs.flag_property(keys.LINE_NUMBERS)
    second = prefs.flag_property(keys.LINE_NUMBERS)
    assert first is second
    assert prefs.flag_property(keys.AUTO_INDENT) is not first


def test_handle_seeded_from_store_and_follows_set_flag(prefs):
    handle = prefs.flag_property(keys.HIGHLIGHTING)
    assert handle.get() is True
    seen = []
    handle.subscribe(seen.append)
    prefs.set_flag(keys.HIGHLIGHTING, False)
    assert handle.get() is False
    assert seen == [False]
    assert prefs.flag_property(keys.HIGHLIGHTING) is handle


def test_set_flag_without_handle_creates_none(prefs):
    prefs.set_flag(keys.SHOW_TEAM_TOOLS, True)
    assert not prefs.flag_registry.has_handle(keys.SHOW_TEAM_TOOLS)
    assert prefs.flag_property(keys.SHOW_TEAM_TOOLS).get() is True


def test_background_set_reaches_handle_on_ui_thread(prefs, qtbot):
    handle = prefs.flag_property(keys.SHOW_TEST_TOOLS)
    ui_ident = threading.get_ident()
    notified_on = []
    handle.subscribe(lambda value: notified_on.append(threading.get_ident()))

    t = threading.Thread(target=prefs.set_flag, args=(keys.SHOW_TEST_TOOLS, True))
    t.start()
    t.join(timeout=5)
    # the store is updated synchronously, the handle only once the UI loop runs
    assert prefs.get_flag(keys.SHOW_TEST_TOOLS) is True
    qtbot.waitUntil(lambda: handle.get() is True)
    assert notified_on == [ui_ident]


def test_flag_property_off_ui_thread_raises(prefs):
    errors = []

    def worker():
        try:
            prefs.flag_property(keys.AUTO_INDENT)
        except WrongThreadError as exc:
            errors.append(exc)

    t = threading.Thread(target=worker)
    t.start()
    t.join(timeout=5)
    assert errors and not prefs.flag_registry.has_handle(keys.AUTO_INDENT)
