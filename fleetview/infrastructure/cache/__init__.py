"""Cache implementations - Infrastructure Layer."""

from .memory_report_cache import InMemoryReportCache

__all__ = ["InMemoryReportCache"]
