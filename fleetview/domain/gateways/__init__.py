"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .runtime_report_gateway import IRuntimeReportGateway
from .trends_gateway import ITrendsGateway

__all__ = ["IRuntimeReportGateway", "ITrendsGateway"]
