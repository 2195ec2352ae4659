"""
Output sink factory for corpusgen.

A sink is any object with a `write(bytes)` method. This module opens the two
sinks the CLI needs, a file or the process stdout, with proper lifecycle
management: files are closed on exit, stdout is flushed and left open.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from corpusgen.utils.logging import get_logger

log = get_logger(__name__)

STDOUT_MARKER = "-"


@contextmanager
def open_sink(
    target: Optional[Union[str, Path]] = None, append: bool = False
) -> Iterator[BinaryIO]:
    """
    Context manager yielding a binary sink.

    Parameters
    ----------
    target : str | Path | None
        Output file path. None or "-" selects stdout.
    append : bool
        Append to an existing file instead of truncating it.

    Example
    -------
        with open_sink("corpus.ndjson") as sink:
            generator.emit(sink)
    """
    if target is None or str(target) == STDOUT_MARKER:
        stream = sys.stdout.buffer
        try:
            yield stream
        finally:
            stream.flush()
        return

    path = Path(target)
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = "ab" if append else "wb"
    log.debug("Opening sink", extra={"path": str(path), "mode": mode})
    with path.open(mode) as f:
        yield f


__all__ = ["open_sink", "STDOUT_MARKER"]
