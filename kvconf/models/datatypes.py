"""Core datatypes shared across kvconf modules.

Responsibilities:
- Enumerate scanner states and the effects a single transition can request.
- Represent immutable transition records produced by the scanner.

Key types:
- `ParseState`, `Effect`, `Transition`, and `ParseOutcome`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ParseState(Enum):
    """Scanner state; exactly one is active at any time."""

    SKIP_SPACE = "skip_space"
    SKIP_COMMENT_LINE = "skip_comment_line"
    PARAM_NAME = "param_name"
    SKIP_SPACE_BEFORE_EQUAL = "skip_space_before_equal"
    SKIP_SPACE_AFTER_EQUAL = "skip_space_after_equal"
    VALUE = "value"
    LINE_END = "line_end"
    VALUE_IN_SINGLE_QUOTE = "value_in_single_quote"
    VALUE_IN_DOUBLE_QUOTE = "value_in_double_quote"

    @property
    def is_quoted_value(self) -> bool:
        """Return whether this state accumulates a quoted value."""

        return self in {ParseState.VALUE_IN_SINGLE_QUOTE, ParseState.VALUE_IN_DOUBLE_QUOTE}


class Effect(Enum):
    """Buffer or result operation requested by one transition."""

    IGNORE = "ignore"
    START_NAME = "start_name"
    APPEND_NAME = "append_name"
    END_NAME = "end_name"
    START_VALUE = "start_value"
    OPEN_QUOTE = "open_quote"
    APPEND_VALUE = "append_value"
    COMMIT = "commit"
    COMMIT_EMPTY = "commit_empty"
    REJECT_NAME_START = "reject_name_start"
    REJECT_NAME_CHAR = "reject_name_char"
    REJECT_TRAILING = "reject_trailing"

    @property
    def is_rejection(self) -> bool:
        """Return whether the effect aborts the scan."""

        return self in {
            Effect.REJECT_NAME_START,
            Effect.REJECT_NAME_CHAR,
            Effect.REJECT_TRAILING,
        }


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of feeding one character to the scanner.

    Attributes:
        state: State active after the character is consumed.
        effect: Operation the driver applies for this character.
    """

    state: ParseState
    effect: Effect = Effect.IGNORE


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    """Summary of a completed scan.

    Attributes:
        values: Parsed name/value mapping.
        lines: Line counter value when the stream ended.
        final_state: State active at end of stream.
        duplicates: Names whose later occurrences were not stored.
    """

    values: dict[str, str]
    lines: int
    final_state: ParseState
    duplicates: tuple[str, ...] = field(default_factory=tuple)
