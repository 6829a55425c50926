"""Pure transition function for the `key = value` scanner.

Responsibilities:
- Classify characters the way the C locale does (ASCII letters and digits,
  `isspace` whitespace).
- Map `(state, character)` to the next state and the effect the driver must
  apply, without touching buffers or counters.

Key public functions:
- `transition`: one scanner step.
"""

from __future__ import annotations

from typing import Callable

from .models.datatypes import Effect, ParseState, Transition


WHITESPACE = frozenset(" \t\n\v\f\r")
COMMENT_CHAR = "#"
ASSIGN_CHAR = "="
NEWLINE = "\n"
SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'


def is_space(char: str) -> bool:
    """Return whether `char` is whitespace (newline included)."""

    return char in WHITESPACE


def is_alpha(char: str) -> bool:
    """Return whether `char` is an ASCII letter."""

    return char.isascii() and char.isalpha()


def is_name_char(char: str) -> bool:
    """Return whether `char` may continue a parameter name."""

    return char == "_" or (char.isascii() and char.isalnum())


def _skip_space(char: str) -> Transition:
    if char == COMMENT_CHAR:
        return Transition(ParseState.SKIP_COMMENT_LINE)
    if is_alpha(char):
        return Transition(ParseState.PARAM_NAME, Effect.START_NAME)
    if is_space(char):
        return Transition(ParseState.SKIP_SPACE)
    return Transition(ParseState.SKIP_SPACE, Effect.REJECT_NAME_START)


def _skip_comment_line(char: str) -> Transition:
    if char == NEWLINE:
        return Transition(ParseState.SKIP_SPACE)
    return Transition(ParseState.SKIP_COMMENT_LINE)


def _param_name(char: str) -> Transition:
    if is_space(char):
        return Transition(ParseState.SKIP_SPACE_BEFORE_EQUAL, Effect.END_NAME)
    if char == ASSIGN_CHAR:
        return Transition(ParseState.SKIP_SPACE_AFTER_EQUAL, Effect.END_NAME)
    if is_name_char(char):
        return Transition(ParseState.PARAM_NAME, Effect.APPEND_NAME)
    return Transition(ParseState.PARAM_NAME, Effect.REJECT_NAME_CHAR)


def _skip_space_before_equal(char: str) -> Transition:
    # Anything other than `=` is skipped until the assignment shows up.
    if char == ASSIGN_CHAR:
        return Transition(ParseState.SKIP_SPACE_AFTER_EQUAL)
    return Transition(ParseState.SKIP_SPACE_BEFORE_EQUAL)


def _skip_space_after_equal(char: str) -> Transition:
    if is_space(char):
        return Transition(ParseState.SKIP_SPACE_AFTER_EQUAL)
    if char == SINGLE_QUOTE:
        return Transition(ParseState.VALUE_IN_SINGLE_QUOTE, Effect.OPEN_QUOTE)
    if char == DOUBLE_QUOTE:
        return Transition(ParseState.VALUE_IN_DOUBLE_QUOTE, Effect.OPEN_QUOTE)
    if char == COMMENT_CHAR:
        return Transition(ParseState.SKIP_COMMENT_LINE, Effect.COMMIT_EMPTY)
    return Transition(ParseState.VALUE, Effect.START_VALUE)


def _value(char: str) -> Transition:
    if char == NEWLINE:
        return Transition(ParseState.SKIP_SPACE, Effect.COMMIT)
    if char == COMMENT_CHAR:
        return Transition(ParseState.SKIP_COMMENT_LINE, Effect.COMMIT)
    if is_space(char):
        return Transition(ParseState.LINE_END, Effect.COMMIT)
    return Transition(ParseState.VALUE, Effect.APPEND_VALUE)


def _line_end(char: str) -> Transition:
    if char == NEWLINE:
        return Transition(ParseState.SKIP_SPACE)
    if is_space(char):
        return Transition(ParseState.LINE_END)
    if char == COMMENT_CHAR:
        return Transition(ParseState.SKIP_COMMENT_LINE)
    return Transition(ParseState.LINE_END, Effect.REJECT_TRAILING)


def _quoted(state: ParseState, delimiter: str) -> Callable[[str], Transition]:
    def step(char: str) -> Transition:
        if char == delimiter:
            return Transition(ParseState.SKIP_SPACE, Effect.COMMIT)
        return Transition(state, Effect.APPEND_VALUE)

    return step


_HANDLERS: dict[ParseState, Callable[[str], Transition]] = {
    ParseState.SKIP_SPACE: _skip_space,
    ParseState.SKIP_COMMENT_LINE: _skip_comment_line,
    ParseState.PARAM_NAME: _param_name,
    ParseState.SKIP_SPACE_BEFORE_EQUAL: _skip_space_before_equal,
    ParseState.SKIP_SPACE_AFTER_EQUAL: _skip_space_after_equal,
    ParseState.VALUE: _value,
    ParseState.LINE_END: _line_end,
    ParseState.VALUE_IN_SINGLE_QUOTE: _quoted(ParseState.VALUE_IN_SINGLE_QUOTE, SINGLE_QUOTE),
    ParseState.VALUE_IN_DOUBLE_QUOTE: _quoted(ParseState.VALUE_IN_DOUBLE_QUOTE, DOUBLE_QUOTE),
}


def transition(state: ParseState, char: str) -> Transition:
    """Return the scanner step for one input character.

    Args:
        state: Currently active scanner state.
        char: Single input character.

    Returns:
        Next state and the effect to apply. Rejection effects leave the state
        unchanged; the driver aborts the scan on them.

    Raises:
        ValueError: If `char` is not exactly one character long.
    """

    if len(char) != 1:
        raise ValueError(f"Scanner expects a single character, got {char!r}.")
    return _HANDLERS[state](char)
