"""Status codes and domain exceptions for configuration parsing."""

from __future__ import annotations

from enum import IntEnum


class ParseStatus(IntEnum):
    """Status codes returned by `parse_config`."""

    OK = 0
    NO_RETURN_CONTAINER = -1
    FILE_ERROR = -2
    WRONG_SYNTAX = -3
    WRONG_PARAM = -4
    WRONG_VALUE = -5
    UNTERMINATED_QUOTE = -6


class ConfigParseError(RuntimeError):
    """Raised when a configuration source cannot be parsed."""

    def __init__(
        self,
        *,
        status: ParseStatus,
        detail: str,
        line: int | None = None,
        source: str | None = None,
    ) -> None:
        """Initialize a parse error anchored to a source line."""

        super().__init__(detail)
        self.status = status
        self.detail = detail
        self.line = line
        self.source = source

    def describe(self) -> str:
        """Return a one-line diagnostic suitable for an error stream."""

        label = self.source or "<stream>"
        if self.line is None:
            return f"Error in {label}: {self.detail}"
        return f"Error in {label}: {self.detail} on line {self.line}"


class SourceUnavailableError(ConfigParseError):
    """Raised when a configuration source cannot be opened or read."""

    def __init__(self, *, detail: str, source: str | None = None) -> None:
        """Initialize a file-level error without a line anchor."""

        super().__init__(status=ParseStatus.FILE_ERROR, detail=detail, source=source)
