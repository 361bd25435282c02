"""In-memory description of a parsed module."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class NumberFormat(Enum):
    HEX = "hex"
    DEC = "dec"
    DEC_SIGNED = "dec_signed"


class ComponentKind:
    """Base for the closed set of component interpretations."""


@dataclass(frozen=True)
class Text(ComponentKind):
    pass


@dataclass(frozen=True)
class HexArray(ComponentKind):
    pass


@dataclass(frozen=True)
class Number(ComponentKind):
    format: NumberFormat


@dataclass(frozen=True)
class Dropbox(ComponentKind):
    format: NumberFormat
    entries: tuple[tuple[int, str], ...] = ()


@dataclass(frozen=True)
class Component:
    description: str
    offset: int
    length: int
    kind: ComponentKind


@dataclass(frozen=True)
class Module:
    description: str = ""
    root_offset: int = 0
    entry_count: int = 0
    entry_length: int = 0
    entry_names: tuple[str, ...] | None = None
    # read-only view when produced by the parser
    charset: Mapping[int, str] | None = None
    components: tuple[Component, ...] = field(default_factory=tuple)
