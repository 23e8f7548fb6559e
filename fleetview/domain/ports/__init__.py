"""
Ports Package - Domain Layer

Protocols for collaborators that the application layer receives by
injection: the report cache and the health probe.
"""

from .health_probe import IHealthProbe
from .report_cache import IReportCache

__all__ = ["IHealthProbe", "IReportCache"]
