"""Parser options and loaders for kvconf.

Responsibilities:
- Define parser limits and policies as a typed dataclass.
- Name the duplicate-key and unterminated-quote policies explicitly.
- Provide an environment-based loader for `ParserOptions`.

Key types:
- `ParserOptions`: limits and policies for one parse call.
- `DuplicatePolicy`: commit behavior for a name seen more than once.
- `UnterminatedQuotePolicy`: end-of-stream behavior inside a quoted value.
- `OptionsLoader`: static construction helpers for `ParserOptions`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
from typing import Mapping


DEFAULT_MAX_NAME_LENGTH = 29
DEFAULT_MAX_VALUE_LENGTH = 254

_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


class DuplicatePolicy(Enum):
    """Commit behavior when a parameter name appears on more than one line."""

    KEEP_FIRST = "keep_first"
    OVERWRITE = "overwrite"


class UnterminatedQuotePolicy(Enum):
    """End-of-stream behavior while a quoted value is still open."""

    ACCEPT = "accept"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Limits and policies applied by one parse call.

    Attributes:
        max_name_length: Longest accepted parameter name, in characters.
        max_value_length: Longest accepted parameter value, in characters.
        duplicate_policy: How a repeated name is committed.
        unterminated_quote: How a quote left open at end of stream is handled.
        encoding: Text encoding used when the source is a filesystem path.
    """

    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
    max_value_length: int = DEFAULT_MAX_VALUE_LENGTH
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST
    unterminated_quote: UnterminatedQuotePolicy = UnterminatedQuotePolicy.ACCEPT
    encoding: str = "utf-8"

    def validate(self) -> None:
        """Validate option values before a parse call."""

        if self.max_name_length <= 0:
            raise ValueError("`max_name_length` must be a positive integer.")
        if self.max_value_length <= 0:
            raise ValueError("`max_value_length` must be a positive integer.")
        if not self.encoding.strip():
            raise ValueError("`encoding` must be a non-empty string.")


class OptionsLoader:
    """Build `ParserOptions` from external sources."""

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ParserOptions:
        """Load parser options from `KVCONF_*` environment variables.

        Blank values fall back to the dataclass defaults.
        """

        source = env if env is not None else os.environ

        max_name_length = OptionsLoader._optional_env_positive_int(
            source, "KVCONF_MAX_NAME_LENGTH"
        )
        max_value_length = OptionsLoader._optional_env_positive_int(
            source, "KVCONF_MAX_VALUE_LENGTH"
        )
        duplicate_policy = OptionsLoader._optional_env_duplicate_policy(
            source, "KVCONF_DUPLICATE_POLICY"
        )
        strict_quotes = OptionsLoader._optional_env_boolean(source, "KVCONF_STRICT_QUOTES")
        encoding = OptionsLoader._optional_env_string(source, "KVCONF_ENCODING")

        options = ParserOptions(
            max_name_length=(
                max_name_length if max_name_length is not None else DEFAULT_MAX_NAME_LENGTH
            ),
            max_value_length=(
                max_value_length if max_value_length is not None else DEFAULT_MAX_VALUE_LENGTH
            ),
            duplicate_policy=(
                duplicate_policy if duplicate_policy is not None else DuplicatePolicy.KEEP_FIRST
            ),
            unterminated_quote=(
                UnterminatedQuotePolicy.REJECT if strict_quotes else UnterminatedQuotePolicy.ACCEPT
            ),
            encoding=encoding or "utf-8",
        )
        options.validate()
        return options

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Return a stripped env value, or `None` when unset or blank."""

        value = env.get(key)
        if value is None:
            return None
        text = value.strip()
        return text or None

    @staticmethod
    def _optional_env_positive_int(env: Mapping[str, str], key: str) -> int | None:
        value = OptionsLoader._optional_env_string(env, key)
        if value is None:
            return None
        try:
            parsed = int(value)
        except ValueError as exc:
            raise ValueError(f"`{key}` must be a positive integer.") from exc
        if parsed <= 0:
            raise ValueError(f"`{key}` must be a positive integer.")
        return parsed

    @staticmethod
    def _optional_env_boolean(env: Mapping[str, str], key: str) -> bool | None:
        value = OptionsLoader._optional_env_string(env, key)
        if value is None:
            return None
        token = value.lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
        raise ValueError(
            f"`{key}` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
        )

    @staticmethod
    def _optional_env_duplicate_policy(
        env: Mapping[str, str], key: str
    ) -> DuplicatePolicy | None:
        value = OptionsLoader._optional_env_string(env, key)
        if value is None:
            return None
        try:
            return DuplicatePolicy(value.lower())
        except ValueError as exc:
            supported = ", ".join(policy.value for policy in DuplicatePolicy)
            raise ValueError(f"`{key}` must be one of: {supported}.") from exc
