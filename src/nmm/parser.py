"""Module file parser.

A module file is a fixed sequence of one-line fields followed by any number
of five-line component records::

    1
    <description>
    <root offset>
    <entry count>
    <entry length>
    <entry names file | NULL>
    <charset file | NULL>
    <component description>        -+
    <component offset>              |
    <component length>              |  repeated
    <kind token>                    |
    <dropbox entries file | NULL>  -+

Blank lines and lines starting with ``#`` are skipped. Referenced files are
resolved against the module file's directory.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from types import MappingProxyType

from nmm.component import build_component
from nmm.errors import (
    InvalidComponentKindError,
    InvalidModuleVersionError,
    LocatedError,
    NmmError,
    UnexpectedEofError,
)
from nmm.lines import read_lines
from nmm.literals import parse_int
from nmm.model import Component, Module
from nmm.readers import read_charset, read_entry_names, resolve_path

MODULE_VERSION = "1"


class ReadState(Enum):
    VERSION = auto()
    DESCRIPTION = auto()
    ROOT_OFFSET = auto()
    ENTRY_COUNT = auto()
    ENTRY_LENGTH = auto()
    ENTRY_NAMES = auto()
    CHARSET = auto()
    COMPONENT_DESCRIPTION = auto()
    COMPONENT_OFFSET = auto()
    COMPONENT_LENGTH = auto()
    COMPONENT_KIND = auto()
    COMPONENT_DROPBOX = auto()


# The only state in which the file may end.
ACCEPTING_STATE = ReadState.COMPONENT_DESCRIPTION


@dataclass
class _PendingComponent:
    description: str = ""
    offset: int = 0
    length: int = 0
    kind_str: str = ""
    kind_lineno: int = 0


@dataclass
class ModuleReader:
    """Consumes significant lines of one module file, one state per line."""

    path: Path
    state: ReadState = ReadState.VERSION
    description: str = ""
    root_offset: int = 0
    entry_count: int = 0
    entry_length: int = 0
    entry_names: tuple[str, ...] | None = None
    charset: dict[int, str] | None = None
    components: list[Component] = field(default_factory=list)
    _pending: _PendingComponent = field(default_factory=_PendingComponent)
    _dispatch: dict[ReadState, Callable[[str, str, int], ReadState]] = field(
        init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._dispatch = self._handlers()

    @property
    def parent_dir(self) -> Path:
        return self.path.parent

    def feed(self, lineno: int, raw: str) -> None:
        """Advance by one significant line; ``raw`` is the untrimmed text."""
        line = raw.strip()
        handler = self._dispatch[self.state]
        try:
            self.state = handler(raw, line, lineno)
        except LocatedError:
            raise
        except InvalidModuleVersionError:
            raise
        except NmmError as err:
            raise LocatedError(self.path, lineno, err) from err

    def finish(self) -> Module:
        if self.state is not ACCEPTING_STATE:
            raise UnexpectedEofError()
        return Module(
            description=self.description,
            root_offset=self.root_offset,
            entry_count=self.entry_count,
            entry_length=self.entry_length,
            entry_names=self.entry_names,
            charset=MappingProxyType(self.charset) if self.charset is not None else None,
            components=tuple(self.components),
        )

    def _handlers(self) -> dict[ReadState, Callable[[str, str, int], ReadState]]:
        return {
            ReadState.VERSION: self._read_version,
            ReadState.DESCRIPTION: self._read_description,
            ReadState.ROOT_OFFSET: self._read_root_offset,
            ReadState.ENTRY_COUNT: self._read_entry_count,
            ReadState.ENTRY_LENGTH: self._read_entry_length,
            ReadState.ENTRY_NAMES: self._read_entry_names,
            ReadState.CHARSET: self._read_charset,
            ReadState.COMPONENT_DESCRIPTION: self._read_component_description,
            ReadState.COMPONENT_OFFSET: self._read_component_offset,
            ReadState.COMPONENT_LENGTH: self._read_component_length,
            ReadState.COMPONENT_KIND: self._read_component_kind,
            ReadState.COMPONENT_DROPBOX: self._read_component_dropbox,
        }

    def _read_version(self, raw: str, line: str, lineno: int) -> ReadState:
        if line != MODULE_VERSION:
            raise InvalidModuleVersionError()
        return ReadState.DESCRIPTION

    def _read_description(self, raw: str, line: str, lineno: int) -> ReadState:
        self.description = raw
        return ReadState.ROOT_OFFSET

    def _read_root_offset(self, raw: str, line: str, lineno: int) -> ReadState:
        self.root_offset = parse_int(line)
        return ReadState.ENTRY_COUNT

    def _read_entry_count(self, raw: str, line: str, lineno: int) -> ReadState:
        self.entry_count = parse_int(line)
        return ReadState.ENTRY_LENGTH

    def _read_entry_length(self, raw: str, line: str, lineno: int) -> ReadState:
        self.entry_length = parse_int(line)
        return ReadState.ENTRY_NAMES

    def _read_entry_names(self, raw: str, line: str, lineno: int) -> ReadState:
        path = resolve_path(self.parent_dir, line)
        if path is not None:
            self.entry_names = read_entry_names(path)
        return ReadState.CHARSET

    def _read_charset(self, raw: str, line: str, lineno: int) -> ReadState:
        path = resolve_path(self.parent_dir, line)
        if path is not None:
            self.charset = read_charset(path)
        return ReadState.COMPONENT_DESCRIPTION

    def _read_component_description(self, raw: str, line: str, lineno: int) -> ReadState:
        self._pending = _PendingComponent(description=raw)
        return ReadState.COMPONENT_OFFSET

    def _read_component_offset(self, raw: str, line: str, lineno: int) -> ReadState:
        self._pending.offset = parse_int(line)
        return ReadState.COMPONENT_LENGTH

    def _read_component_length(self, raw: str, line: str, lineno: int) -> ReadState:
        self._pending.length = parse_int(line)
        return ReadState.COMPONENT_KIND

    def _read_component_kind(self, raw: str, line: str, lineno: int) -> ReadState:
        self._pending.kind_str = raw
        self._pending.kind_lineno = lineno
        return ReadState.COMPONENT_DROPBOX

    def _read_component_dropbox(self, raw: str, line: str, lineno: int) -> ReadState:
        pending = self._pending
        try:
            component = build_component(
                pending.description,
                pending.offset,
                pending.length,
                pending.kind_str,
                resolve_path(self.parent_dir, line),
            )
        except InvalidComponentKindError as err:
            # report a bad token at the line that holds it
            raise LocatedError(self.path, pending.kind_lineno, err) from err
        self.components.append(component)
        return ReadState.COMPONENT_DESCRIPTION


def _is_significant(line: str) -> bool:
    return bool(line) and not line.startswith("#")


def from_file(path: Path | str) -> Module:
    """Parse a module file and every auxiliary file it references."""
    reader = ModuleReader(Path(path))
    with read_lines(reader.path) as lines:
        for lineno, raw in lines:
            if _is_significant(raw.strip()):
                reader.feed(lineno, raw)
    return reader.finish()
