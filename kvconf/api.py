"""Public entry points for parsing configuration files.

Key public functions:
- `parse`: return the parsed mapping or raise `ConfigParseError`.
- `parse_config`: fill a caller-supplied mapping and return a `ParseStatus`.
"""

from __future__ import annotations

from contextlib import ExitStack
from typing import MutableMapping

from .config import ParserOptions
from .errors import ConfigParseError, ParseStatus, SourceUnavailableError
from .io.source import ConfigSource, open_source, source_label
from .parser import ConfigParser, commit
from .telemetry.logger import ParseLogger


def parse(
    source: ConfigSource,
    name: str | None = None,
    options: ParserOptions | None = None,
    logger: ParseLogger | None = None,
) -> dict[str, str]:
    """Parse a configuration path or readable text stream.

    Args:
        source: Filesystem path or already-opened text stream.
        name: Diagnostic label; defaults to the path or the stream's name.
        options: Limits and policies; defaults to `ParserOptions()`.
        logger: Diagnostic channel; defaults to the global loguru logger.

    Raises:
        SourceUnavailableError: If the source cannot be opened or read.
        ConfigParseError: On the first lexical or syntax error.
    """

    parser = ConfigParser(options, logger)
    label = name or source_label(source)
    with ExitStack() as stack:
        try:
            stream = stack.enter_context(
                open_source(source, encoding=parser.options.encoding)
            )
        except SourceUnavailableError as exc:
            parser.logger.log_parse_failure(label, exc.status.name, exc.detail, exc.line)
            raise
        return parser.parse_stream(stream, label)


def parse_config(
    source: ConfigSource,
    out_map: MutableMapping[str, str] | None,
    options: ParserOptions | None = None,
    logger: ParseLogger | None = None,
) -> ParseStatus:
    """Parse `source` into `out_map` and return a status code.

    Parse and input failures are reported through the returned status and the
    logger, never raised. On any failure `out_map` is left empty. On success,
    parsed pairs are merged into `out_map` under the duplicate policy, so keys
    already present are kept unless the policy is `OVERWRITE`.

    Raises:
        ValueError: If `options` are invalid.
    """

    if out_map is None:
        return ParseStatus.NO_RETURN_CONTAINER

    resolved_options = options if options is not None else ParserOptions()
    try:
        parsed = parse(source, options=resolved_options, logger=logger)
    except ConfigParseError as exc:
        out_map.clear()
        return exc.status

    for key, value in parsed.items():
        commit(out_map, key, value, resolved_options.duplicate_policy)
    return ParseStatus.OK
