"""Input helpers for kvconf.

This package opens configuration sources for the parser.
"""

from .source import ConfigSource, open_source, source_label

__all__ = ["ConfigSource", "open_source", "source_label"]
