# Shared fixtures. Qt runs on the offscreen platform so the suite works headless;
# `qapp` / `qtbot` come from pytest-qt.

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402

from prefsync.services.preference_backend import InMemoryPreferenceBackend  # noqa: E402
from prefsync.services.preference_keys import DEFAULT_PROPERTIES  # noqa: E402
from prefsync.services.preference_state import PreferenceState  # noqa: E402
from prefsync.services.ui_dispatcher import UiDispatcher  # noqa: E402


@pytest.fixture
def backend():
    return InMemoryPreferenceBackend(DEFAULT_PROPERTIES)


@pytest.fixture
def dispatcher(qapp):
    return UiDispatcher()


@pytest.fixture
def prefs(backend, dispatcher):
    state = PreferenceState(backend, dispatcher, is_macos=False)
    state.initialize()
    return state
