"""Top-level package for kvconf.

This package parses small `key = value` configuration files into a mapping of
parameter names to string values. The main entry points are `parse` and the
status-code returning `parse_config`.
"""

from .api import parse, parse_config
from .config import DuplicatePolicy, OptionsLoader, ParserOptions, UnterminatedQuotePolicy
from .errors import ConfigParseError, ParseStatus, SourceUnavailableError
from .parser import ConfigParser

__all__ = [
    "ConfigParseError",
    "ConfigParser",
    "DuplicatePolicy",
    "OptionsLoader",
    "ParseStatus",
    "ParserOptions",
    "SourceUnavailableError",
    "UnterminatedQuotePolicy",
    "__version__",
    "parse",
    "parse_config",
]

__version__ = "0.1.0"
