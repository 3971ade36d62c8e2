"""Tests for taskflow.preferences — the dark-mode flag."""

from __future__ import annotations

import pytest

from taskflow.preferences import load_dark_mode, save_dark_mode
from taskflow.storage import MemoryStorage

from .test_storage import BrokenStorage

KEY = "darkMode"


def test_absent_is_false():
    assert load_dark_mode(MemoryStorage(), KEY) is False


@pytest.mark.parametrize("raw", ["garbage", "1", "\"true\"", "null"])
def test_non_boolean_is_false(raw):
    assert load_dark_mode(MemoryStorage({KEY: raw}), KEY) is False


def test_round_trip():
    storage = MemoryStorage()
    save_dark_mode(storage, KEY, True)
    assert storage.get_item(KEY) == "true"
    assert load_dark_mode(storage, KEY) is True
    save_dark_mode(storage, KEY, False)
    assert load_dark_mode(storage, KEY) is False


def test_storage_errors_are_tolerated():
    broken = BrokenStorage(fail_get=True, fail_set=True)
    save_dark_mode(broken, KEY, True)
    assert load_dark_mode(broken, KEY) is False


def test_independent_of_task_key():
    storage = MemoryStorage({"taskflow-tasks": "[]"})
    save_dark_mode(storage, KEY, True)
    assert storage.get_item("taskflow-tasks") == "[]"
