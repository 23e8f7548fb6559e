"""
Fleetview Root Module

Runtime reporting service for forklift/vehicle fleets. It resolves report
time windows, fetches per-vehicle telemetry from a remote HTTP API with
response caching, and shapes the results into rows with an optional
linear trend overlay.

Layer Structure:
- Domain: Entities, errors, gateway interfaces and pure report logic
- Application: Use cases and DTOs
- Infrastructure: HTTP gateways, report cache and health checks
- Presentation: FastAPI routers
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""

__version__ = "1.0.0"
