"""Shared fixtures for the test suite."""

import pytest

from wiki_search.config import config


@pytest.fixture
def fresh_config(monkeypatch):
    """Give a test the config singleton and restore it afterwards."""
    yield config
    monkeypatch.undo()
    config.reset()


@pytest.fixture
def preferences_path(tmp_path, monkeypatch):
    path = tmp_path / "preferences.json"
    monkeypatch.setattr(config, "preferences_path", str(path))
    return path
