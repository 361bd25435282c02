"""Readers for the auxiliary files a module references.

Unlike the module file itself, every line of these files is significant:
blank lines and ``#`` lines are not skipped.
"""

from __future__ import annotations

from pathlib import Path

from nmm.errors import (
    InvalidCharsetError,
    LocatedError,
    MissingDropboxLabelError,
    NmmError,
    TooManyComponentEntriesError,
)
from nmm.lines import read_lines
from nmm.literals import parse_int, parse_radix

NULL_FILENAME = "NULL"


def resolve_path(parent_dir: Path, name: str) -> Path | None:
    """Resolve a referenced filename against the module's directory; ``NULL`` means none."""
    if name == NULL_FILENAME:
        return None
    return parent_dir / name


def read_entry_names(path: Path) -> tuple[str, ...]:
    with read_lines(path) as lines:
        return tuple(line for _lineno, line in lines)


def read_charset(path: Path) -> dict[int, str]:
    """Parse ``<hex byte>=<char>`` lines into a byte -> character mapping."""
    charset: dict[int, str] = {}
    with read_lines(path) as lines:
        for lineno, raw in lines:
            parts = [part.strip() for part in raw.strip().split("=")]
            try:
                if len(parts) != 2:
                    raise InvalidCharsetError()
                code = parse_radix(parts[0], 16)
            except NmmError as err:
                raise LocatedError(path, lineno, err) from err
            charset[code & 0xFF] = parts[1][:1] or "\x00"
    return charset


def read_dropbox_entries(path: Path | None) -> tuple[tuple[int, str], ...]:
    """Parse a count-prefixed ``<value> <label>`` list.

    The count on the first line caps the number of entries; a shorter list is
    accepted as is.
    """
    if path is None:
        return ()

    entries: list[tuple[int, str]] = []
    remaining: int | None = None
    with read_lines(path) as lines:
        for lineno, raw in lines:
            line = raw.strip()
            try:
                if remaining is None:
                    remaining = parse_int(line)
                    continue
                if remaining == 0:
                    raise TooManyComponentEntriesError()
                value, sep, label = line.partition(" ")
                if not sep:
                    raise MissingDropboxLabelError()
                entries.append((parse_int(value), label))
            except NmmError as err:
                raise LocatedError(path, lineno, err) from err
            remaining -= 1
    return tuple(entries)
