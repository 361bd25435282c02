"""Error model for module parsing.

Every failure is an ``NmmError``. Errors raised while a specific line of a
specific file is being processed are wrapped in ``LocatedError``; a located
error from an auxiliary file may itself sit inside another located error.
"""

from __future__ import annotations

from pathlib import Path


class NmmError(Exception):
    """Base class for everything raised by the parser."""

    message = "Module parse error"

    def __str__(self) -> str:
        return self.message


class LocatedError(NmmError):
    def __init__(self, filename: Path, line: int, source: NmmError) -> None:
        super().__init__(filename, line, source)
        self.filename = Path(filename)
        self.line = line
        self.source = source

    def __str__(self) -> str:
        return f"At {self.filename}:{self.line}: {self.source}"

    def trail(self) -> list[tuple[Path, int]]:
        """Return every (filename, line) from the outermost wrapper inwards."""
        trail: list[tuple[Path, int]] = []
        err: NmmError = self
        while isinstance(err, LocatedError):
            trail.append((err.filename, err.line))
            err = err.source
        return trail

    @property
    def root(self) -> NmmError:
        err: NmmError = self
        while isinstance(err, LocatedError):
            err = err.source
        return err


class InvalidModuleVersionError(NmmError):
    message = 'Invalid module version (it can only be "1")'


class InvalidComponentKindError(NmmError):
    def __init__(self, token: str) -> None:
        super().__init__(token)
        self.token = token

    def __str__(self) -> str:
        return f"Invalid component kind {self.token!r}"


class InvalidCharsetError(NmmError):
    message = "Malformed charset file"


class TooManyComponentEntriesError(NmmError):
    message = "Too many component entries"


class MissingDropboxLabelError(NmmError, IndexError):
    message = "Dropbox entry has no label (expected '<value> <label>')"


class UnexpectedEofError(NmmError):
    message = "Unexpected end of module file"


class IoError(NmmError):
    def __init__(self, source: OSError | UnicodeDecodeError) -> None:
        super().__init__(source)
        self.source = source

    def __str__(self) -> str:
        return f"IO error: {self.source}"


class ParseIntError(NmmError, ValueError):
    def __init__(self, source: ValueError) -> None:
        super().__init__(source)
        self.source = source

    def __str__(self) -> str:
        return f"Int parse error: {self.source}"
