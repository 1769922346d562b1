import threading

import pytest

from prefsync.services import preference_keys as keys
from prefsync.services.flag_store import FlagStore
from prefsync.services.preference_backend import InMemoryPreferenceBackend


@pytest.fixture
def store(backend, dispatcher):
    s = FlagStore(backend, dispatcher)
    s.initialize(keys.ALL_FLAGS)
    return s


def test_initial_values_are_compiled_defaults(store):
    assert store.get_flag(keys.HIGHLIGHTING) is True
    assert store.get_flag(keys.AUTO_INDENT) is False
    assert store.get_flag(keys.START_WITH_ELEVATED) is True
    assert set(store.known_flags()) == set(keys.ALL_FLAGS)


def test_initialize_reads_user_overrides(dispatcher):
    backend = InMemoryPreferenceBackend(
        keys.DEFAULT_PROPERTIES, values={keys.AUTO_INDENT: "true", keys.HIGHLIGHTING: "false"}
    )
    s = FlagStore(backend, dispatcher)
    s.initialize(keys.ALL_FLAGS)
    assert s.get_flag(keys.AUTO_INDENT) is True
    assert s.get_flag(keys.HIGHLIGHTING) is False


def test_initialize_without_backend_defaults_uses_default_of(dispatcher):
    s = FlagStore(InMemoryPreferenceBackend(), dispatcher)
    s.initialize(["a", "b"], default_of=lambda name: name == "a")
    assert s.snapshot() == {"a": True, "b": False}


@pytest.mark.parametrize("name", keys.ALL_FLAGS)
def test_set_then_get_every_flag(store, name):
    store.set_flag(name, True)
    assert store.get_flag(name) is True
    store.set_flag(name, False)
    assert store.get_flag(name) is False


def test_unknown_flag_reads_false(store):
    assert store.get_flag("no.such.flag") is False


def test_value_matching_default_removes_override(store, backend):
    store.set_flag(keys.HIGHLIGHTING, False)
    assert backend.user_values()[keys.HIGHLIGHTING] == "false"
    store.set_flag(keys.HIGHLIGHTING, True)
    assert not backend.has_user_value(keys.HIGHLIGHTING)
    assert store.get_flag(keys.HIGHLIGHTING) is True


def test_flag_without_backend_default_is_always_written(dispatcher):
    backend = InMemoryPreferenceBackend()
    s = FlagStore(backend, dispatcher)
    s.set_flag("custom.flag", False)
    assert backend.user_values() == {"custom.flag": "false"}
    assert s.get_flag("custom.flag") is False


def test_ui_listeners_notified_after_set(store):
    seen = []
    store.add_ui_listener(lambda name, value: seen.append((name, value)))
    store.set_flag(keys.MAKE_BACKUP, True)
    assert seen == [(keys.MAKE_BACKUP, True)]


def test_concurrent_writers_leave_consistent_state(store, backend):
    names = [keys.AUTO_INDENT, keys.LINE_NUMBERS, keys.MAKE_BACKUP]

    def worker(value):
        for _ in range(50):
            for name in names:
                store.set_flag(name, value)

    threads = [threading.Thread(target=worker, args=(v,)) for v in (True, False)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    for name in names:
        in_memory = store.get_flag(name)
        persisted = backend.has_user_value(name)
        # defaults are all False, so an override exists iff the flag is on
        assert persisted is in_memory


@pytest.mark.parametrize("stored", ["TRUE", "True", " true ", "yes", "1"])
def test_only_exact_true_text_reads_as_on(dispatcher, stored):
    backend = InMemoryPreferenceBackend(keys.DEFAULT_PROPERTIES, values={keys.AUTO_INDENT: stored})
    s = FlagStore(backend, dispatcher)
    s.initialize(keys.ALL_FLAGS)
    assert s.get_flag(keys.AUTO_INDENT) is False
    assert keys.parse_flag(stored) is False
    assert keys.parse_flag("true") is True
