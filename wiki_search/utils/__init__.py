"""Utility functions and classes."""

from .preferences import LanguagePreference

__all__ = ["LanguagePreference"]
