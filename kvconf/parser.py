"""Finite-state-machine driver for `key = value` configuration text.

Responsibilities:
- Feed characters through `scanner.transition` one at a time.
- Own the name/value buffers, the line counter, and length limits.
- Commit completed pairs under the configured duplicate policy.
- Resolve end-of-stream states into commits or errors.

Key types:
- `ConfigParser`: reusable parser bound to `ParserOptions`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, TextIO

from .config import DuplicatePolicy, ParserOptions, UnterminatedQuotePolicy
from .errors import ConfigParseError, ParseStatus, SourceUnavailableError
from .models.datatypes import Effect, ParseOutcome, ParseState
from .scanner import NEWLINE, transition
from .telemetry.logger import ParseLogger


_READ_CHUNK_SIZE = 4096

_REJECTIONS: dict[Effect, tuple[ParseStatus, str]] = {
    Effect.REJECT_NAME_START: (
        ParseStatus.WRONG_PARAM,
        "param name can't start with not alpha char {char!r}",
    ),
    Effect.REJECT_NAME_CHAR: (ParseStatus.WRONG_PARAM, "wrong char in param name {char!r}"),
    Effect.REJECT_TRAILING: (ParseStatus.WRONG_SYNTAX, "wrong char {char!r}"),
}


def commit(
    values: dict[str, str],
    name: str,
    value: str,
    policy: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST,
) -> bool:
    """Store one completed pair and return whether the map changed.

    Under `KEEP_FIRST` a name that is already present keeps its stored value.
    """

    if policy is DuplicatePolicy.KEEP_FIRST and name in values:
        return False
    values[name] = value
    return True


@dataclass(slots=True)
class _ScanContext:
    """Mutable buffers for one scan."""

    source: str
    state: ParseState = ParseState.SKIP_SPACE
    line: int = 1
    name: list[str] = field(default_factory=list)
    value: list[str] = field(default_factory=list)
    values: dict[str, str] = field(default_factory=dict)
    duplicates: list[str] = field(default_factory=list)


class ConfigParser:
    """Parse configuration text into a name/value mapping."""

    def __init__(
        self,
        options: ParserOptions | None = None,
        logger: ParseLogger | None = None,
    ) -> None:
        """Initialize the parser with validated options and a diagnostic logger."""

        self.options = options if options is not None else ParserOptions()
        self.options.validate()
        self.logger = logger if logger is not None else ParseLogger()

    def parse_text(self, text: str, name: str = "<string>") -> dict[str, str]:
        """Parse an in-memory configuration string."""

        return self.scan(text, name).values

    def parse_stream(self, stream: TextIO, name: str = "<stream>") -> dict[str, str]:
        """Parse a readable text stream without closing it.

        Raises:
            ConfigParseError: On lexical or syntax errors.
            SourceUnavailableError: If reading the stream fails.
        """

        return self.scan(_iter_stream_chars(stream, name), name).values

    def scan(self, chars: Iterable[str], name: str = "<stream>") -> ParseOutcome:
        """Run the scanner over `chars` and return the full outcome.

        Raises:
            ConfigParseError: On the first offending character, or at end of
                stream when an open quote is rejected by policy.
        """

        context = _ScanContext(source=name)
        self.logger.log_parse_start(name)
        try:
            for char in chars:
                self._step(context, char)
            self._finish(context)
        except ConfigParseError as exc:
            self.logger.log_parse_failure(
                exc.source or name, exc.status.name, exc.detail, exc.line
            )
            raise
        self.logger.log_parse_complete(name, pairs=len(context.values), lines=context.line)
        return ParseOutcome(
            values=context.values,
            lines=context.line,
            final_state=context.state,
            duplicates=tuple(context.duplicates),
        )

    def _step(self, context: _ScanContext, char: str) -> None:
        """Consume one character.

        Inside quotes a newline belongs to the value, so the line counter
        advances before the value length check. Elsewhere it advances after
        the effect, attributing a newline-triggered commit to the line it ends.
        """

        newline_first = char == NEWLINE and context.state.is_quoted_value
        if newline_first:
            context.line += 1
        step = transition(context.state, char)
        self._apply(context, step.effect, char)
        context.state = step.state
        if char == NEWLINE and not newline_first:
            context.line += 1

    def _apply(self, context: _ScanContext, effect: Effect, char: str) -> None:
        """Apply one transition effect to the scan buffers."""

        if effect.is_rejection:
            status, template = _REJECTIONS[effect]
            raise self._error(context, status, template.format(char=char))
        if effect is Effect.START_NAME:
            context.name = [char]
        elif effect is Effect.APPEND_NAME:
            if len(context.name) + 1 > self.options.max_name_length:
                raise self._error(context, ParseStatus.WRONG_PARAM, "param length is very big")
            context.name.append(char)
        elif effect is Effect.START_VALUE:
            context.value = []
            self._append_value(context, char)
        elif effect is Effect.OPEN_QUOTE:
            context.value = []
        elif effect is Effect.APPEND_VALUE:
            self._append_value(context, char)
        elif effect is Effect.COMMIT:
            self._commit(context, "".join(context.value))
        elif effect is Effect.COMMIT_EMPTY:
            context.value = []
            self._commit(context, "")
        # IGNORE and END_NAME leave the buffers untouched; the name buffer
        # stays intact until the next START_NAME.

    def _append_value(self, context: _ScanContext, char: str) -> None:
        if len(context.value) + 1 > self.options.max_value_length:
            raise self._error(context, ParseStatus.WRONG_VALUE, "value length is very big")
        context.value.append(char)

    def _commit(self, context: _ScanContext, value: str) -> None:
        name = "".join(context.name)
        stored = commit(context.values, name, value, self.options.duplicate_policy)
        if not stored:
            context.duplicates.append(name)
            self.logger.log_duplicate_ignored(context.source, name, context.line)

    def _finish(self, context: _ScanContext) -> None:
        """Resolve the state left open when the input ends."""

        if context.state.is_quoted_value:
            if self.options.unterminated_quote is UnterminatedQuotePolicy.REJECT:
                raise self._error(
                    context, ParseStatus.UNTERMINATED_QUOTE, "unterminated quoted value"
                )
            self._commit(context, "".join(context.value))
        elif context.state is ParseState.VALUE:
            self._commit(context, "".join(context.value))
        elif context.state is ParseState.SKIP_SPACE_AFTER_EQUAL:
            self._commit(context, "")

    @staticmethod
    def _error(context: _ScanContext, status: ParseStatus, detail: str) -> ConfigParseError:
        return ConfigParseError(
            status=status,
            detail=detail,
            line=context.line,
            source=context.source,
        )


def _iter_stream_chars(stream: TextIO, name: str) -> Iterator[str]:
    """Yield the characters of `stream`, mapping read failures to file errors."""

    while True:
        try:
            chunk = stream.read(_READ_CHUNK_SIZE)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailableError(
                detail=f"Can't read config source: {exc}",
                source=name,
            ) from exc
        if not chunk:
            return
        if not isinstance(chunk, str):
            raise SourceUnavailableError(
                detail="Config source must be opened in text mode.",
                source=name,
            )
        yield from chunk
