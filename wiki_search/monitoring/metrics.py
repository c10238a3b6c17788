"""
Metrics Collection for Wiki Search

This module collects operational metrics for the search client with prometheus_client.
The exporter HTTP server is only started when telemetry is enabled in the configuration;
metrics are always recorded in the default registry.

Metric Categories:
1. Search Metrics:
   - Search cycles by outcome (results, suggestions, empty, timeout, failed)
   - Search latency
   - Cache hits and misses

2. API Metrics:
   - Requests by endpoint
   - Errors by kind

Example Usage:
    from wiki_search.monitoring.metrics import MetricsManager

    metrics = MetricsManager()
    metrics.increment_counter("searches_performed", labels={"outcome": "results"})
    metrics.observe_value("search_latency", 0.42)
"""

import logging
from typing import Dict, Optional

from prometheus_client import Counter, Histogram, start_http_server

from ..config import config

logger = logging.getLogger(__name__)


class MetricsManager:
    """Metrics manager."""

    _instance = None
    _server_started = False

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize metrics manager."""
        if not hasattr(self, "initialized"):
            self.initialized = False
            self.counters: Dict[str, Counter] = {}
            self.histograms: Dict[str, Histogram] = {}

    def initialize(self) -> None:
        """Initialize metrics manager."""
        if self.initialized:
            return

        try:
            if config.enable_telemetry and not self._server_started:
                try:
                    start_http_server(config.metrics_port)
                    MetricsManager._server_started = True
                    logger.info(
                        f"Started Prometheus metrics server on port {config.metrics_port}"
                    )
                except OSError as e:
                    logger.warning(
                        f"Metrics server not started on port {config.metrics_port}: {e}"
                    )

            self._initialize_metrics()
            self.initialized = True

        except Exception as e:
            logger.error(f"Failed to initialize metrics manager: {e}")
            raise

    def _initialize_metrics(self) -> None:
        """Initialize metrics."""
        # Counters
        self.counters["searches_performed"] = Counter(
            "wiki_search_searches_performed_total",
            "Total number of completed search cycles",
            ["outcome"],
        )
        self.counters["cache_hits"] = Counter(
            "wiki_search_cache_hits_total",
            "Total number of result cache hits",
        )
        self.counters["cache_misses"] = Counter(
            "wiki_search_cache_misses_total",
            "Total number of result cache misses",
        )
        self.counters["api_requests"] = Counter(
            "wiki_search_api_requests_total",
            "Total number of requests sent to the encyclopedia API",
            ["endpoint"],
        )
        self.counters["api_errors"] = Counter(
            "wiki_search_api_errors_total",
            "Total number of failed encyclopedia API requests",
            ["kind"],
        )

        # Histograms
        self.histograms["search_latency"] = Histogram(
            "wiki_search_search_latency_seconds",
            "Search cycle latency in seconds",
        )

    def increment_counter(
        self, name: str, value: int = 1, labels: Optional[Dict] = None
    ) -> None:
        """Increment counter.

        Args:
            name: Counter name
            value: Value to increment by
            labels: Counter labels
        """
        if not self.initialized:
            self.initialize()

        counter = self.counters.get(name)
        if not counter:
            logger.error(f"Counter {name} not found")
            return

        if labels:
            counter.labels(**labels).inc(value)
        else:
            counter.inc(value)

    def observe_value(self, name: str, value: float) -> None:
        """Observe histogram value.

        Args:
            name: Histogram name
            value: Value to observe
        """
        if not self.initialized:
            self.initialize()

        histogram = self.histograms.get(name)
        if not histogram:
            logger.error(f"Histogram {name} not found")
            return

        histogram.observe(value)


# Global instance
metrics_manager = MetricsManager()
