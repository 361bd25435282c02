from pathlib import Path

import pytest

from nmm.component import build_component, kind_token
from nmm.errors import InvalidComponentKindError
from nmm.model import Dropbox, HexArray, Number, NumberFormat, Text


@pytest.mark.parametrize(
    "token,kind",
    [
        ("TEXT", Text()),
        ("HEXA", HexArray()),
        ("NEHU", Number(NumberFormat.HEX)),
        ("NEDU", Number(NumberFormat.DEC)),
        ("NEDS", Number(NumberFormat.DEC_SIGNED)),
    ],
)
def test_simple_kinds(token: str, kind) -> None:
    component = build_component("Name", 4, 2, f" {token} ", None)
    assert component.kind == kind
    assert kind_token(component.kind) == token


def test_non_dropbox_kind_never_opens_file(tmp_path: Path) -> None:
    component = build_component("Name", 0, 1, "TEXT", tmp_path / "missing.txt")
    assert component.kind == Text()


def test_dropbox_kind_reads_entries(tmp_path: Path) -> None:
    entries = tmp_path / "db.txt"
    entries.write_text("1\n5 Five\n")
    component = build_component("Type", 8, 1, "NDHU", entries)
    assert component.kind == Dropbox(NumberFormat.HEX, ((5, "Five"),))
    assert kind_token(component.kind) == "NDHU"


def test_dropbox_kind_with_null_file_is_empty():
    component = build_component("Type", 8, 1, "NDDU", None)
    assert component.kind == Dropbox(NumberFormat.DEC, ())


def test_unknown_kind():
    with pytest.raises(InvalidComponentKindError) as excinfo:
        build_component("Name", 0, 1, "ABCD", None)
    assert excinfo.value.token == "ABCD"
