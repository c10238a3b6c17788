"""Persisted user preferences."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config import LANGUAGE_PATTERN, config

logger = logging.getLogger(__name__)


class LanguagePreference:
    """Preferred search language, stored as a small JSON document."""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        default: Optional[str] = None,
    ):
        """Initialize language preference.

        Args:
            path: Preferences file (defaults to config)
            default: Language returned when nothing valid is stored
        """
        self.path = Path(path or config.preferences_path)
        self.default = default or config.default_language

    def load(self) -> str:
        """Read the stored language.

        Returns:
            Stored language code, or the default when the file is missing,
            unreadable or holds an invalid code
        """
        data = self._read()
        language = str(data.get("language", "")).lower()
        if not LANGUAGE_PATTERN.match(language):
            return self.default
        return language

    def save(self, language: str) -> None:
        """Store the language.

        Args:
            language: Two-letter language code

        Raises:
            ValueError: If the language code is invalid
        """
        language = language.strip().lower()
        if not LANGUAGE_PATTERN.match(language):
            raise ValueError(f"Invalid language code: {language!r}")

        data = self._read()
        data["language"] = language
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save preferences to {self.path}: {e}")
            return
        logger.debug(f"Saved language preference {language} to {self.path}")

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}


__all__ = ["LanguagePreference"]
