"""Render parsed modules as JSON, YAML or Arrow for inspection."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import orjson
import pyarrow as pa
import yaml

from nmm.component import kind_token
from nmm.model import Component, Dropbox, Module, Number

ExportFormat = Literal["json", "yaml", "arrow"]
SUPPORTED_FORMATS = {"json", "yaml", "arrow"}


@dataclass
class ExportConfig:
    format: ExportFormat = "json"
    include_entry_names: bool = True
    include_charset: bool = True


def component_to_dict(component: Component) -> dict[str, Any]:
    kind = component.kind
    payload: dict[str, Any] = {
        "description": component.description,
        "offset": component.offset,
        "length": component.length,
        "kind": kind_token(kind),
    }
    if isinstance(kind, (Number, Dropbox)):
        payload["format"] = kind.format.value
    if isinstance(kind, Dropbox):
        payload["entries"] = [{"value": value, "label": label} for value, label in kind.entries]
    return payload


def module_to_dict(module: Module, config: ExportConfig | None = None) -> dict[str, Any]:
    cfg = config or ExportConfig()
    payload: dict[str, Any] = {
        "description": module.description,
        "root_offset": module.root_offset,
        "entry_count": module.entry_count,
        "entry_length": module.entry_length,
        "components": [component_to_dict(c) for c in module.components],
    }
    if cfg.include_entry_names:
        payload["entry_names"] = list(module.entry_names) if module.entry_names is not None else None
    if cfg.include_charset:
        # byte keys as two-digit hex, the way charset files spell them
        payload["charset"] = (
            {f"{code:02X}": char for code, char in sorted(module.charset.items())}
            if module.charset is not None
            else None
        )
    return payload


def dumps_json(module: Module, config: ExportConfig | None = None) -> bytes:
    return orjson.dumps(module_to_dict(module, config), option=orjson.OPT_INDENT_2)


def dumps_yaml(module: Module, config: ExportConfig | None = None) -> str:
    return yaml.safe_dump(module_to_dict(module, config), sort_keys=False, allow_unicode=True)


def components_to_arrow(module: Module, path: Path) -> None:
    """Write one Arrow IPC row per component."""
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [component_to_dict(c) for c in module.components]
    table = pa.table(
        {
            "index": list(range(len(rows))),
            "description": [r["description"] for r in rows],
            "offset": pa.array([r["offset"] for r in rows], type=pa.uint32()),
            "length": pa.array([r["length"] for r in rows], type=pa.uint32()),
            "kind": [r["kind"] for r in rows],
            "format": [r.get("format") for r in rows],
            # store entries as JSON to keep schema simple
            "entries": [json.dumps(r.get("entries", [])) for r in rows],
        }
    )
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)


def write_module(module: Module, path: Path, config: ExportConfig | None = None) -> None:
    cfg = config or ExportConfig()
    if cfg.format == "arrow":
        components_to_arrow(module, path)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    if cfg.format == "yaml":
        path.write_text(dumps_yaml(module, cfg), encoding="utf-8")
    else:
        path.write_bytes(dumps_json(module, cfg))
