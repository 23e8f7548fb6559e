"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the gateway
interfaces defined in the domain layer. These implementations
handle the details of external service communications.
"""

from .runtime_report_gateway import RuntimeReportGateway
from .trends_gateway import TrendsGateway

__all__ = ["RuntimeReportGateway", "TrendsGateway"]
