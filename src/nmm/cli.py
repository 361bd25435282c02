from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nmm.component import kind_token
from nmm.errors import LocatedError, NmmError
from nmm.export import SUPPORTED_FORMATS, ExportConfig, dumps_json, dumps_yaml, write_module
from nmm.model import Dropbox, Module, Number
from nmm.parser import from_file

app = typer.Typer(help="Inspect module description (.nmm) files.")
console = Console()


def _report_error(path: Path, err: NmmError) -> None:
    console.print(f"[bold red]Failed[/] to parse {escape(str(path))}")
    if isinstance(err, LocatedError):
        for filename, line in err.trail():
            console.print(f"  at {escape(str(filename))}:{line}")
        console.print(f"  [red]{escape(str(err.root))}[/]")
    else:
        console.print(f"  [red]{escape(str(err))}[/]")


def _load(path: Path) -> Module:
    try:
        return from_file(path)
    except NmmError as err:
        _report_error(path, err)
        raise typer.Exit(code=1) from err


@app.command()
def show(
    module_file: Path = typer.Argument(..., help="Module file to parse."),
    entries: bool = typer.Option(
        False, "--entries", help="Also list dropbox entries under each component."
    ),
) -> None:
    """Print the module header and its component table."""
    module = _load(module_file)
    console.print(f"[bold]{escape(module.description)}[/]")
    console.print(
        f"root offset 0x{module.root_offset:X}, {module.entry_count} entries "
        f"of {module.entry_length} bytes"
    )
    if module.entry_names is not None:
        console.print(f"{len(module.entry_names)} entry names")
    if module.charset is not None:
        console.print(f"charset with {len(module.charset)} mappings")

    table = Table(title=f"{len(module.components)} components")
    table.add_column("#", justify="right")
    table.add_column("Description")
    table.add_column("Offset", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Kind")
    for idx, component in enumerate(module.components):
        kind = component.kind
        label = kind_token(kind)
        if isinstance(kind, (Number, Dropbox)):
            label += f" ({kind.format.value})"
        if isinstance(kind, Dropbox):
            label += f", {len(kind.entries)} entries"
        table.add_row(
            str(idx),
            escape(component.description),
            f"0x{component.offset:X}",
            str(component.length),
            label,
        )
    console.print(table)

    if entries:
        for component in module.components:
            if isinstance(component.kind, Dropbox) and component.kind.entries:
                console.print(f"[bold]{escape(component.description)}[/]")
                for value, name in component.kind.entries:
                    console.print(f"  {value}: {escape(name)}")


@app.command()
def export(
    module_file: Path = typer.Argument(..., help="Module file to parse."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the parsed module."
    ),
    format: str = typer.Option("json", "--format", "-f", help="json | yaml | arrow."),
    no_entry_names: bool = typer.Option(False, "--no-entry-names", help="Omit entry names."),
    no_charset: bool = typer.Option(False, "--no-charset", help="Omit the charset mapping."),
) -> None:
    """Write the parsed module as JSON, YAML or an Arrow component table."""
    fmt = format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise typer.BadParameter(f"Unsupported format '{format}'. Choose from {SUPPORTED_FORMATS}.")
    if fmt == "arrow" and output is None:
        raise typer.BadParameter("Arrow output needs --output.")

    cfg = ExportConfig(
        format=fmt,  # type: ignore[arg-type]
        include_entry_names=not no_entry_names,
        include_charset=not no_charset,
    )
    module = _load(module_file)
    if output:
        write_module(module, output, cfg)
        console.print(
            f"[bold green]Wrote[/] {len(module.components)} components to {escape(str(output))}"
        )
    elif fmt == "yaml":
        # plain stdout: the console would wrap long strings
        typer.echo(dumps_yaml(module, cfg), nl=False)
    else:
        typer.echo(dumps_json(module, cfg).decode())


@app.command()
def check(
    module_files: list[Path] = typer.Argument(..., help="Module files to validate."),
) -> None:
    """Parse each module file and report whether it is well formed."""
    failed = 0
    for path in module_files:
        try:
            module = from_file(path)
        except NmmError as err:
            failed += 1
            _report_error(path, err)
            continue
        console.print(
            f"[bold green]OK[/] {escape(str(path))} ({len(module.components)} components)"
        )
    if failed:
        console.print(f"[bold red]{failed} of {len(module_files)} failed[/]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
