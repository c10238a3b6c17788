"""Tests for the persisted language preference."""

import json

import pytest

from wiki_search.utils.preferences import LanguagePreference


def test_missing_file_returns_default(tmp_path):
    assert LanguagePreference(path=tmp_path / "prefs.json", default="en").load() == "en"


def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "prefs.json"
    preference = LanguagePreference(path=path, default="en")

    preference.save(" ID ")

    assert json.loads(path.read_text()) == {"language": "id"}
    assert LanguagePreference(path=path, default="en").load() == "id"


def test_save_keeps_other_keys(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"theme": "dark", "language": "en"}))

    LanguagePreference(path=path).save("id")

    assert json.loads(path.read_text()) == {"theme": "dark", "language": "id"}


@pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"language": "english"}', '{"language": 7}'])
def test_unusable_file_returns_default(tmp_path, content):
    path = tmp_path / "prefs.json"
    path.write_text(content)
    assert LanguagePreference(path=path, default="en").load() == "en"


@pytest.mark.parametrize("code", ["", "e", "eng", "e1"])
def test_invalid_code_is_rejected(tmp_path, code):
    path = tmp_path / "prefs.json"
    with pytest.raises(ValueError):
        LanguagePreference(path=path).save(code)
    assert not path.exists()


def test_defaults_come_from_config(preferences_path):
    preference = LanguagePreference()
    assert preference.path == preferences_path
    preference.save("id")
    assert preferences_path.exists()
