"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the remote
telemetry APIs and the in-process report cache.
"""

from fleetview.infrastructure import cache, gateways, services

__all__ = ["cache", "gateways", "services"]
