"""Base service class and the error kinds of a search cycle."""

import logging
from typing import Any, Dict, Generic, Optional, TypeVar

from ..config import config as config_instance
from ..monitoring.metrics import MetricsManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ServiceException(Exception):
    """Base service exception."""

    def __init__(
        self,
        message: str,
        service_name: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize service exception.

        Args:
            message: Error message
            service_name: Service name
            error_code: Error code
            details: Additional error details
        """
        super().__init__(message)
        self.service_name = service_name
        self.error_code = error_code
        self.details = details or {}


class NetworkFailure(ServiceException):
    """Request failed at the transport level or returned a non-success status."""

    def __init__(
        self,
        message: str,
        service_name: str = "wikipedia",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, service_name, "network_failure", details)


class MalformedResponse(ServiceException):
    """Response body did not match the expected JSON shape."""

    def __init__(
        self,
        message: str,
        service_name: str = "wikipedia",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, service_name, "malformed_response", details)


class SearchTimeout(ServiceException):
    """Search cycle did not complete before its deadline."""

    def __init__(self, timeout: float, service_name: str = "orchestrator") -> None:
        super().__init__(
            f"Search timed out after {timeout:g} seconds",
            service_name,
            "timeout",
            {"timeout": timeout},
        )
        self.timeout = timeout


class SearchSuperseded(ServiceException):
    """A newer request started before this one finished.

    Not a failure: raised internally so stale cycles can unwind, and never
    surfaced to the user.
    """

    def __init__(self, request_id: int, current_id: int) -> None:
        super().__init__(
            f"Request {request_id} superseded by request {current_id}",
            "orchestrator",
            "superseded",
            {"request_id": request_id, "current_id": current_id},
        )
        self.request_id = request_id
        self.current_id = current_id


class BaseService(Generic[T]):
    """Base service class."""

    def __init__(
        self,
        config: Optional[Any] = None,
        metrics_manager: Optional[MetricsManager] = None,
    ) -> None:
        """Initialize base service.

        Args:
            config: Configuration instance
            metrics_manager: Metrics manager
        """
        self.config = config or config_instance
        self.metrics = metrics_manager or MetricsManager()

    async def initialize(self) -> None:
        """Initialize service resources."""
        raise NotImplementedError

    async def cleanup(self) -> None:
        """Clean up service resources."""
        raise NotImplementedError

    async def health_check(self) -> T:
        """Check service health.

        Returns:
            Health check results
        """
        raise NotImplementedError

    async def start(self) -> None:
        """Start the service."""
        await self.initialize()

    async def stop(self) -> None:
        """Stop the service."""
        await self.cleanup()


__all__ = [
    "BaseService",
    "MalformedResponse",
    "NetworkFailure",
    "SearchSuperseded",
    "SearchTimeout",
    "ServiceException",
]
