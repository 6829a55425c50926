"""Structured parse diagnostics.

Responsibilities:
- Emit concise, deterministic parse lifecycle logs through `loguru`.
- Report parse failures with the source label and line number.
"""

from __future__ import annotations

from itertools import count
from typing import TextIO

from loguru import logger as _loguru_logger


_LOGGER_IDS = count(1)


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class ParseLogger:
    """Emit deterministic diagnostic lines for configuration parsing.

    With a sink, a dedicated handler is attached that only receives this
    instance's records, lifecycle events included. Without a sink, only
    failures are emitted, through whatever handlers the global loguru logger
    has; successful parses stay silent.
    """

    def __init__(self, sink: TextIO | None = None, level: str = "DEBUG") -> None:
        """Bind a per-instance logger and optionally attach a private sink."""

        self._logger_id = next(_LOGGER_IDS)
        self._logger = _loguru_logger.bind(kvconf_logger=self._logger_id)
        self._handler_id: int | None = None
        if sink is not None:
            logger_id = self._logger_id
            self._handler_id = _loguru_logger.add(
                sink,
                format="{message}",
                level=level,
                colorize=False,
                filter=lambda record: record["extra"].get("kvconf_logger") == logger_id,
            )

    def __enter__(self) -> ParseLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Detach the private sink, if one was attached."""

        if self._handler_id is not None:
            _loguru_logger.remove(self._handler_id)
            self._handler_id = None

    @property
    def has_sink(self) -> bool:
        """Return whether a private sink is currently attached."""

        return self._handler_id is not None

    def _emit(self, level: str, event: str, **context: object) -> None:
        """Emit one structured diagnostic line."""

        line = f"[config] level={level} event={event}{_format_context(context)}"
        self._logger.log(level, line)

    def _emit_lifecycle(self, event: str, **context: object) -> None:
        """Emit a DEBUG lifecycle event; only private sinks receive these."""

        if not self.has_sink:
            return
        self._emit("DEBUG", event, **context)

    def log_parse_start(self, source: str) -> None:
        """Emit a parse-start event."""

        self._emit_lifecycle("parse_start", source=source)

    def log_parse_complete(self, source: str, pairs: int, lines: int) -> None:
        """Emit a parse-complete event with the number of stored pairs."""

        self._emit_lifecycle("parse_complete", source=source, pairs=pairs, lines=lines)

    def log_duplicate_ignored(self, source: str, name: str, line: int) -> None:
        """Emit an event for a repeated name that was not stored."""

        self._emit_lifecycle("duplicate_ignored", source=source, name=name, line=line)

    def log_parse_failure(
        self, source: str, status: str, detail: str, line: int | None
    ) -> None:
        """Emit a parse-failure event followed by the human-readable diagnostic."""

        self._emit(
            "ERROR",
            "parse_failure",
            source=source,
            status=status,
            line=line if line is not None else "none",
        )
        if line is None:
            self._logger.error(f"Error in {source}: {detail}")
        else:
            self._logger.error(f"Error in {source}: {detail} on line {line}")
