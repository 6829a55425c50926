"""Telemetry and diagnostics.

This package reports parse lifecycle events and failures.
"""

from .logger import ParseLogger

__all__ = ["ParseLogger"]
