# Shared fixtures. Qt is forced onto the offscreen platform so the QTimer
# scheduler tests run headless.

import os

import pytest

from reportsort.utils.debounce import ManualScheduler


@pytest.fixture(autouse=True, scope="session")
def _set_offscreen():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    return True


@pytest.fixture
def scheduler():
    return ManualScheduler()
