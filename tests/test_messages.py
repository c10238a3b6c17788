"""Tests for localized messages."""

import pytest

from wiki_search.cli.ui.messages import MESSAGES, translate


def test_catalogs_have_same_keys():
    assert set(MESSAGES["id"]) == set(MESSAGES["en"])


@pytest.mark.parametrize(
    "language, expected",
    [
        ("en", 'Result for "Einstein" in 0.123 seconds'),
        ("id", 'Hasil untuk "Einstein" dalam 0.123 detik'),
    ],
)
def test_format_parameters(language, expected):
    assert translate("search_results_for", language, query="Einstein", time="0.123") == expected


def test_unknown_language_falls_back_to_english():
    assert translate("no_results", "fr") == MESSAGES["en"]["no_results"]


def test_unknown_key_is_returned():
    assert translate("no_such_message", "en") == "no_such_message"


def test_language_messages():
    assert translate("language_set", "id", code="id") == "Bahasa pencarian diatur ke id."
    assert translate("language_current", "en", code="en") == "Current search language: en"
