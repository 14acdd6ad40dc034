"""Runtime services shared by every editor layer."""

from . import telemetry

__all__ = ["telemetry"]
