"""Monitoring package."""

from .metrics import MetricsManager, metrics_manager

__all__ = ["MetricsManager", "metrics_manager"]
