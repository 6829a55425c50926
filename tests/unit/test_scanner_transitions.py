"""Unit tests for the pure scanner transition function."""

from __future__ import annotations

import pytest

from kvconf.models.datatypes import Effect, ParseState, Transition
from kvconf.scanner import is_alpha, is_name_char, is_space, transition


S = ParseState
E = Effect


@pytest.mark.parametrize(
    ("state", "char", "expected_state", "expected_effect"),
    [
        (S.SKIP_SPACE, "#", S.SKIP_COMMENT_LINE, E.IGNORE),
        (S.SKIP_SPACE, "\n", S.SKIP_SPACE, E.IGNORE),
        (S.SKIP_SPACE, " ", S.SKIP_SPACE, E.IGNORE),
        (S.SKIP_SPACE, "\t", S.SKIP_SPACE, E.IGNORE),
        (S.SKIP_SPACE, "h", S.PARAM_NAME, E.START_NAME),
        (S.SKIP_SPACE, "Z", S.PARAM_NAME, E.START_NAME),
        (S.SKIP_SPACE, "1", S.SKIP_SPACE, E.REJECT_NAME_START),
        (S.SKIP_SPACE, "_", S.SKIP_SPACE, E.REJECT_NAME_START),
        (S.SKIP_SPACE, "=", S.SKIP_SPACE, E.REJECT_NAME_START),
        (S.SKIP_COMMENT_LINE, "\n", S.SKIP_SPACE, E.IGNORE),
        (S.SKIP_COMMENT_LINE, "x", S.SKIP_COMMENT_LINE, E.IGNORE),
        (S.SKIP_COMMENT_LINE, "#", S.SKIP_COMMENT_LINE, E.IGNORE),
        (S.PARAM_NAME, " ", S.SKIP_SPACE_BEFORE_EQUAL, E.END_NAME),
        (S.PARAM_NAME, "\n", S.SKIP_SPACE_BEFORE_EQUAL, E.END_NAME),
        (S.PARAM_NAME, "=", S.SKIP_SPACE_AFTER_EQUAL, E.END_NAME),
        (S.PARAM_NAME, "a", S.PARAM_NAME, E.APPEND_NAME),
        (S.PARAM_NAME, "7", S.PARAM_NAME, E.APPEND_NAME),
        (S.PARAM_NAME, "_", S.PARAM_NAME, E.APPEND_NAME),
        (S.PARAM_NAME, "-", S.PARAM_NAME, E.REJECT_NAME_CHAR),
        (S.PARAM_NAME, "#", S.PARAM_NAME, E.REJECT_NAME_CHAR),
        (S.SKIP_SPACE_BEFORE_EQUAL, " ", S.SKIP_SPACE_BEFORE_EQUAL, E.IGNORE),
        (S.SKIP_SPACE_BEFORE_EQUAL, "\n", S.SKIP_SPACE_BEFORE_EQUAL, E.IGNORE),
        (S.SKIP_SPACE_BEFORE_EQUAL, "=", S.SKIP_SPACE_AFTER_EQUAL, E.IGNORE),
        (S.SKIP_SPACE_BEFORE_EQUAL, "x", S.SKIP_SPACE_BEFORE_EQUAL, E.IGNORE),
        (S.SKIP_SPACE_AFTER_EQUAL, " ", S.SKIP_SPACE_AFTER_EQUAL, E.IGNORE),
        (S.SKIP_SPACE_AFTER_EQUAL, "\n", S.SKIP_SPACE_AFTER_EQUAL, E.IGNORE),
        (S.SKIP_SPACE_AFTER_EQUAL, "'", S.VALUE_IN_SINGLE_QUOTE, E.OPEN_QUOTE),
        (S.SKIP_SPACE_AFTER_EQUAL, '"', S.VALUE_IN_DOUBLE_QUOTE, E.OPEN_QUOTE),
        (S.SKIP_SPACE_AFTER_EQUAL, "#", S.SKIP_COMMENT_LINE, E.COMMIT_EMPTY),
        (S.SKIP_SPACE_AFTER_EQUAL, "v", S.VALUE, E.START_VALUE),
        (S.SKIP_SPACE_AFTER_EQUAL, "=", S.VALUE, E.START_VALUE),
        (S.VALUE, "\n", S.SKIP_SPACE, E.COMMIT),
        (S.VALUE, "#", S.SKIP_COMMENT_LINE, E.COMMIT),
        (S.VALUE, " ", S.LINE_END, E.COMMIT),
        (S.VALUE, "\r", S.LINE_END, E.COMMIT),
        (S.VALUE, "x", S.VALUE, E.APPEND_VALUE),
        (S.VALUE, "'", S.VALUE, E.APPEND_VALUE),
        (S.LINE_END, "\n", S.SKIP_SPACE, E.IGNORE),
        (S.LINE_END, " ", S.LINE_END, E.IGNORE),
        (S.LINE_END, "#", S.SKIP_COMMENT_LINE, E.IGNORE),
        (S.LINE_END, "x", S.LINE_END, E.REJECT_TRAILING),
        (S.VALUE_IN_SINGLE_QUOTE, "'", S.SKIP_SPACE, E.COMMIT),
        (S.VALUE_IN_SINGLE_QUOTE, '"', S.VALUE_IN_SINGLE_QUOTE, E.APPEND_VALUE),
        (S.VALUE_IN_SINGLE_QUOTE, "\n", S.VALUE_IN_SINGLE_QUOTE, E.APPEND_VALUE),
        (S.VALUE_IN_SINGLE_QUOTE, "#", S.VALUE_IN_SINGLE_QUOTE, E.APPEND_VALUE),
        (S.VALUE_IN_DOUBLE_QUOTE, '"', S.SKIP_SPACE, E.COMMIT),
        (S.VALUE_IN_DOUBLE_QUOTE, "'", S.VALUE_IN_DOUBLE_QUOTE, E.APPEND_VALUE),
        (S.VALUE_IN_DOUBLE_QUOTE, " ", S.VALUE_IN_DOUBLE_QUOTE, E.APPEND_VALUE),
    ],
)
def test_transition_table(
    state: ParseState,
    char: str,
    expected_state: ParseState,
    expected_effect: Effect,
) -> None:
    """Each `(state, char)` pair should map to exactly one documented step."""

    assert transition(state, char) == Transition(expected_state, expected_effect)


@pytest.mark.parametrize("state", list(ParseState))
def test_every_state_handles_arbitrary_characters(state: ParseState) -> None:
    """No state should be missing a handler for printable or control input."""

    for char in "aZ9_ =#'\"\n\t-\x00é":
        step = transition(state, char)
        assert isinstance(step.state, ParseState)
        assert isinstance(step.effect, Effect)


def test_rejections_keep_the_current_state() -> None:
    """Rejection effects should not move the scanner to another state."""

    assert transition(S.SKIP_SPACE, "$").state is S.SKIP_SPACE
    assert transition(S.PARAM_NAME, ".").state is S.PARAM_NAME
    assert transition(S.LINE_END, "x").state is S.LINE_END
    assert transition(S.LINE_END, "x").effect.is_rejection


@pytest.mark.parametrize("char", ["", "ab"])
def test_transition_rejects_non_single_characters(char: str) -> None:
    """The scanner consumes exactly one character per step."""

    with pytest.raises(ValueError, match="single character"):
        transition(S.SKIP_SPACE, char)


def test_character_classes_follow_c_locale() -> None:
    """Letters and digits are ASCII only; whitespace matches `isspace`."""

    assert is_alpha("a") and is_alpha("Q")
    assert not is_alpha("é")
    assert not is_alpha("1")
    assert is_name_char("_") and is_name_char("5") and is_name_char("b")
    assert not is_name_char("-")
    assert not is_name_char("٣")
    for char in " \t\n\v\f\r":
        assert is_space(char)
    assert not is_space(" ")


def test_quoted_states_are_flagged() -> None:
    """Only the two quoted-value states report `is_quoted_value`."""

    quoted = {state for state in ParseState if state.is_quoted_value}

    assert quoted == {S.VALUE_IN_SINGLE_QUOTE, S.VALUE_IN_DOUBLE_QUOTE}


def test_only_reject_effects_are_rejections() -> None:
    """The driver aborts on exactly the three `REJECT_*` effects."""

    rejecting = {effect for effect in Effect if effect.is_rejection}

    assert rejecting == {E.REJECT_NAME_START, E.REJECT_NAME_CHAR, E.REJECT_TRAILING}
