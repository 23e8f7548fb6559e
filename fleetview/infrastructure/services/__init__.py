"""Infrastructure services."""

from .endpoint_prober import HttpEndpointProber, ProbeTarget

__all__ = ["HttpEndpointProber", "ProbeTarget"]
