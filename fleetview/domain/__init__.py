"""
Domain Layer Package

This package contains the core report logic of the application. It defines
entities, gateway interfaces, ports and pure services without dependencies
on external frameworks or infrastructure concerns.
"""

from fleetview.domain import entities, gateways, ports, services

__all__ = ["entities", "gateways", "ports", "services"]
