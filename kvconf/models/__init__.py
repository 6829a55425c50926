"""Shared typed data models for kvconf.

This package contains the scanner state and transition records used by the
scanner and the parser driver.
"""

from .datatypes import Effect, ParseOutcome, ParseState, Transition

__all__ = [
    "Effect",
    "ParseOutcome",
    "ParseState",
    "Transition",
]
