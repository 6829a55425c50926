"""Configuration source acquisition.

Responsibilities:
- Turn a filesystem path or an already-opened text stream into a readable stream.
- Close streams opened here on every exit path; leave caller streams open.
- Map open/read failures to `SourceUnavailableError`.
"""

from __future__ import annotations

from contextlib import contextmanager
import os
from pathlib import Path
from typing import Iterator, TextIO, Union

from ..errors import SourceUnavailableError


ConfigSource = Union[str, os.PathLike, TextIO]


def source_label(source: ConfigSource) -> str:
    """Return a diagnostic label for a path or stream source."""

    if isinstance(source, (str, os.PathLike)):
        return str(Path(source))
    name = getattr(source, "name", None)
    if isinstance(name, str) and name:
        return name
    return "<stream>"


@contextmanager
def open_source(source: ConfigSource, encoding: str = "utf-8") -> Iterator[TextIO]:
    """Yield a readable text stream for `source`.

    Paths are opened with universal newlines so `\\r\\n` files count lines the
    same way as `\\n` files.

    Raises:
        SourceUnavailableError: If a path cannot be opened.
    """

    if not isinstance(source, (str, os.PathLike)):
        if not callable(getattr(source, "read", None)):
            raise SourceUnavailableError(
                detail="Source is neither a path nor a readable stream.",
                source=source_label(source),
            )
        yield source
        return

    label = source_label(source)
    try:
        stream = open(source, "r", encoding=encoding)
    except OSError as exc:
        raise SourceUnavailableError(
            detail=f"Can't open config file: {exc.strerror or exc}",
            source=label,
        ) from exc
    except LookupError as exc:
        raise SourceUnavailableError(
            detail=f"Unknown encoding `{encoding}`.",
            source=label,
        ) from exc

    with stream:
        yield stream
