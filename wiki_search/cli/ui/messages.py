"""Localized user-facing messages."""

from typing import Any, Dict

from ...constants import DEFAULT_LANGUAGE

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "search_title": "Search Algorithm",
        "search_placeholder": "Search Wikipedia articles...",
        "no_results": "No results found. Try another search term.",
        "search_results_for": 'Result for "{query}" in {time} seconds',
        "search_results_similar": 'Result for "{query}" or similar in {time} seconds',
        "failed_search": "Failed to search. Please try again.",
        "recommend_search": 'Did you mean to search for "{term}"?',
        "timeout_warning": "The search is taking too long. Check your connection and retry.",
        "suggestions_title": "Did you mean one of these?",
        "language_set": "Search language set to {code}.",
        "language_current": "Current search language: {code}",
    },
    "id": {
        "search_title": "Algoritma Pencarian",
        "search_placeholder": "Cari artikel Wikipedia...",
        "no_results": "Tidak ada hasil ditemukan. Coba istilah pencarian lain.",
        "search_results_for": 'Hasil untuk "{query}" dalam {time} detik',
        "search_results_similar": 'Hasil untuk "{query}" atau yang mirip dalam {time} detik',
        "failed_search": "Gagal mencari. Silakan coba lagi.",
        "recommend_search": 'Apakah Anda ingin mencari "{term}"?',
        "timeout_warning": "Pencarian terlalu lama. Periksa koneksi Anda dan coba lagi.",
        "suggestions_title": "Apakah maksud Anda salah satu dari ini?",
        "language_set": "Bahasa pencarian diatur ke {code}.",
        "language_current": "Bahasa pencarian saat ini: {code}",
    },
}


def translate(key: str, language: str = DEFAULT_LANGUAGE, **params: Any) -> str:
    """Look up and format a message.

    Unknown languages and keys missing from a language fall back to English;
    unknown keys are returned as-is.

    Args:
        key: Message key
        language: Language code
        **params: Values for the message placeholders

    Returns:
        Formatted message
    """
    catalog = MESSAGES.get(language, MESSAGES[DEFAULT_LANGUAGE])
    template = catalog.get(key) or MESSAGES[DEFAULT_LANGUAGE].get(key, key)
    return template.format(**params) if params else template


__all__ = ["MESSAGES", "translate"]
