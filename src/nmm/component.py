"""Resolve component kind tokens into ``ComponentKind`` values."""

from __future__ import annotations

from pathlib import Path

from nmm.errors import InvalidComponentKindError
from nmm.model import Component, ComponentKind, Dropbox, HexArray, Number, NumberFormat, Text
from nmm.readers import read_dropbox_entries

SIMPLE_KINDS: dict[str, ComponentKind] = {
    "TEXT": Text(),
    "HEXA": HexArray(),
    "NEHU": Number(NumberFormat.HEX),
    "NEDU": Number(NumberFormat.DEC),
    "NEDS": Number(NumberFormat.DEC_SIGNED),
}
DROPBOX_FORMATS: dict[str, NumberFormat] = {
    "NDHU": NumberFormat.HEX,
    "NDDU": NumberFormat.DEC,
}


def kind_token(kind: ComponentKind) -> str:
    """Inverse of the token tables, used when rendering a parsed module."""
    if isinstance(kind, Dropbox):
        return next(t for t, fmt in DROPBOX_FORMATS.items() if fmt == kind.format)
    return next(t for t, simple in SIMPLE_KINDS.items() if simple == kind)


def build_component(
    description: str,
    offset: int,
    length: int,
    kind_str: str,
    dropbox_file: Path | None,
) -> Component:
    token = kind_str.strip()
    kind: ComponentKind
    if token in SIMPLE_KINDS:
        kind = SIMPLE_KINDS[token]
    elif token in DROPBOX_FORMATS:
        kind = Dropbox(DROPBOX_FORMATS[token], read_dropbox_entries(dropbox_file))
    else:
        raise InvalidComponentKindError(token)
    return Component(description=description, offset=offset, length=length, kind=kind)
