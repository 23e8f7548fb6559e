"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidRangeError(DomainError):
    """Raised when a date range is malformed, inverted or empty."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class EmptySelectionError(DomainError):
    """Raised when a query names no entities."""

    def __init__(
        self,
        message: str = "At least one entity must be selected",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class UnknownEntityError(DomainError):
    """Raised when a query names an entity that is not part of the fleet."""

    def __init__(self, entity_ids: list[str], details: Optional[Dict[str, Any]] = None):
        self.entity_ids = entity_ids
        message = f"Unknown entities: {', '.join(entity_ids)}"
        super().__init__(message, details)


class TelemetryGatewayError(DomainError):
    """Raised when the remote telemetry API cannot serve a request."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ReportNotAvailableError(DomainError):
    """Raised when a report is requested before any query cycle completed."""

    def __init__(
        self,
        message: str = "No runtime report has been generated yet",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
