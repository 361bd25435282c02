from pathlib import Path

import orjson
import pyarrow.ipc as pa_ipc
import yaml

from nmm.export import ExportConfig, dumps_json, dumps_yaml, module_to_dict, write_module
from nmm.model import Component, Dropbox, HexArray, Module, Number, NumberFormat, Text


def _sample_module() -> Module:
    return Module(
        description="Items",
        root_offset=0x200,
        entry_count=2,
        entry_length=16,
        entry_names=("Sword", "Shield"),
        charset={0x41: "A", 0x01: "\x00"},
        components=(
            Component("Name", 0, 8, Text()),
            Component("Raw", 8, 4, HexArray()),
            Component("Price", 12, 2, Number(NumberFormat.DEC_SIGNED)),
            Component("Type", 14, 1, Dropbox(NumberFormat.HEX, ((1, "Weapon"), (2, "Armor")))),
        ),
    )


def test_module_to_dict_renders_tokens_and_charset():
    payload = module_to_dict(_sample_module())
    assert [c["kind"] for c in payload["components"]] == ["TEXT", "HEXA", "NEDS", "NDHU"]
    assert payload["components"][2]["format"] == "dec_signed"
    assert payload["components"][3]["entries"] == [
        {"value": 1, "label": "Weapon"},
        {"value": 2, "label": "Armor"},
    ]
    assert list(payload["charset"]) == ["01", "41"]
    assert payload["entry_names"] == ["Sword", "Shield"]


def test_module_to_dict_respects_config():
    payload = module_to_dict(
        _sample_module(), ExportConfig(include_entry_names=False, include_charset=False)
    )
    assert "entry_names" not in payload
    assert "charset" not in payload


def test_dumps_json_and_yaml_agree():
    module = _sample_module()
    assert orjson.loads(dumps_json(module)) == yaml.safe_load(dumps_yaml(module))


def test_write_module_arrow(tmp_path: Path) -> None:
    out = tmp_path / "out" / "components.arrow"
    write_module(_sample_module(), out, ExportConfig(format="arrow"))
    with pa_ipc.open_file(out) as reader:
        table = reader.read_all()
    assert table.num_rows == 4
    assert table.column("kind").to_pylist() == ["TEXT", "HEXA", "NEDS", "NDHU"]
    assert orjson.loads(table.column("entries").to_pylist()[3])[1]["label"] == "Armor"


def test_write_module_yaml(tmp_path: Path) -> None:
    out = tmp_path / "module.yaml"
    write_module(_sample_module(), out, ExportConfig(format="yaml"))
    assert yaml.safe_load(out.read_text(encoding="utf-8"))["root_offset"] == 0x200
