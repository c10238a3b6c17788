"""Service base classes and error types."""

from .base import (
    BaseService,
    MalformedResponse,
    NetworkFailure,
    SearchSuperseded,
    SearchTimeout,
    ServiceException,
)

__all__ = [
    "BaseService",
    "MalformedResponse",
    "NetworkFailure",
    "SearchSuperseded",
    "SearchTimeout",
    "ServiceException",
]
