"""Line-by-line access to module and auxiliary files."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from nmm.errors import IoError


class LineSource:
    """An opened text file yielding ``(lineno, text)`` pairs, 1-based.

    The file is opened on construction; use it as a context manager so the
    handle is released even when the caller stops early or raises.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        try:
            self._handle = self.path.open(encoding="utf-8", newline="\n")
        except OSError as err:
            raise IoError(err) from err

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> LineSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[tuple[int, str]]:
        lineno = 0
        while True:
            try:
                line = self._handle.readline()
            except (OSError, UnicodeDecodeError) as err:
                raise IoError(err) from err
            if not line:
                return
            lineno += 1
            # only the terminator goes; callers decide about whitespace
            if line.endswith("\n"):
                line = line[:-1].removesuffix("\r")
            yield lineno, line


def read_lines(path: Path) -> LineSource:
    """Open ``path`` now; iterate the result for its lines."""
    return LineSource(path)
