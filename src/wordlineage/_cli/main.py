import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from wordlineage._io import LineageFormatError, export_to_toml, load_lineage_from_toml
from wordlineage._lineage import Lineage

from .config import ConfigError, LineageConfig, get_config
from .render import render_check_table, render_family_table, render_sort_outcome

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Word lineage CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _config() -> LineageConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _resolve_input(path: Path | None) -> Path:
    """Return the input path, falling back to [tool.wordlineage].input."""
    if path is not None:
        return path
    config = _config()
    if config.input is None:
        err_console.print("[red]Error: No input file given and no \\[tool.wordlineage].input configured[/red]")
        raise typer.Exit(code=1)
    return config.input


def _load(path: Path) -> Lineage:
    if not path.exists():
        err_console.print(f"[red]Error: Input file not found: {escape(str(path))}[/red]")
        raise typer.Exit(code=1)
    err_console.print(f"[cyan]Loading lineage from:[/cyan] {path}")
    try:
        return load_lineage_from_toml(path)
    except LineageFormatError as e:
        logger.debug("Failed to load %s", path, exc_info=True)
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def show(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to lineage TOML file"),
    ] = None,
) -> None:
    """Show every family with its words and their relations."""
    lineage = _load(_resolve_input(path))

    if not lineage.families:
        out_console.print("[dim]No families[/dim]")
        return

    for family in lineage.families:
        render_family_table(family, out_console)


@app.command()
def sort(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to lineage TOML file"),
    ] = None,
    *,
    family_name: Annotated[
        str | None,
        typer.Option("--family", help="Sort only the family with this name"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file (defaults to the configured output, then the input)"),
    ] = None,
) -> None:
    """Sort families into topological order and save the result."""
    input_path = _resolve_input(path)
    lineage = _load(input_path)

    if family_name is None:
        families = list(lineage.families)
    else:
        try:
            families = [lineage.family(family_name)]
        except KeyError as e:
            err_console.print(f"[red]Error: No family named {escape(family_name)!r}[/red]")
            raise typer.Exit(code=1) from e

    results = [(family, family.sort()) for family in families]
    for family, outcome in results:
        render_sort_outcome(family, outcome, out_console)

    if not all(outcome.succeeded for _, outcome in results):
        err_console.print()
        err_console.print("[red]✗ Cycles detected; nothing was written[/red]")
        raise typer.Exit(code=1)

    # The configured output only applies when the input also came from the config
    if output is None and path is None:
        output = _config().output
    if output is None:
        output = input_path

    export_to_toml(lineage, output)
    err_console.print()
    err_console.print(f"[green]✓ Sorted lineage written to {output}[/green]")


@app.command()
def check(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to lineage TOML file"),
    ] = None,
) -> None:
    """Check that every family can be sorted (contains no cycle)."""
    lineage = _load(_resolve_input(path))

    results = lineage.sort_all()
    render_check_table(results, out_console)

    if not all(outcome.succeeded for _, outcome in results):
        err_console.print("[red]✗ Some families contain cycles[/red]")
        raise typer.Exit(code=1)

    err_console.print("[green]✓ All families are acyclic[/green]")


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Argument(help="Path to the TOML file to create"),
    ],
    *,
    name: Annotated[
        str,
        typer.Option("--name", help="Name of the initial family"),
    ] = "Word Family 1",
    force: Annotated[
        bool,
        typer.Option("-f", "--force", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Create a new lineage file with one empty family."""
    if output.exists() and not force:
        err_console.print(f"[red]Error: {output} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(code=1)

    lineage = Lineage()
    lineage.add_family(name)
    export_to_toml(lineage, output)
    err_console.print(f"[green]✓ Created {output}[/green]")


def main() -> None:
    app()
