from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from adapters.filesystem.layout_repository import FileSystemLayoutRepository
from adapters.filesystem.map_repository import FileSystemMapRepository
from adapters.filesystem.map_utils import layout_path_for
from app.config import AppSettings, load_settings
from app.wiring import build_layout_engine
from domain.services.build_activity_graph import build_activity_graph
from domain.services.graph_traversal import ensure_layout_root
from domain.services.layout_map import MapLayoutBuilder
from domain.services.layout_metrics import compute_layout_metrics

app = typer.Typer(no_args_is_help=True)
console = Console()


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    try:
        settings = load_settings(config)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Invalid settings:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    logging.basicConfig(
        level=settings.layout.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    ctx.obj = settings


@app.command("layout")
def layout_maps(
    ctx: typer.Context,
    input_dir: Optional[Path] = typer.Option(None, help="Directory with map JSON files."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory to write layout files."),
    engine: Optional[str] = typer.Option(None, help="Layout engine: orthogonal or tree."),
) -> None:
    settings = _settings(ctx)
    input_dir = input_dir or settings.layout.map_dir
    output_dir = output_dir or settings.layout.layout_dir
    try:
        builder = MapLayoutBuilder(build_layout_engine(settings, engine))
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise typer.Exit(code=1) from exc
    layout_repo = FileSystemLayoutRepository()

    try:
        pairs = FileSystemMapRepository().load_all_with_paths(input_dir)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Cannot load maps from {input_dir}:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    if not pairs:
        console.print(f"[yellow]No map files found in {input_dir}[/]")
        raise typer.Exit(code=0)

    for path, document in pairs:
        try:
            result = builder.build(document)
        except ValueError as exc:
            console.print(f"[red]Layout failed for {path}:[/] {escape(str(exc))}")
            raise typer.Exit(code=1) from exc
        target_path = layout_path_for(path, output_dir)
        layout_repo.save(result, target_path)
        console.print(f"[green]Wrote[/] {target_path}")


@app.command("show")
def show_map(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Map JSON file."),
    engine: Optional[str] = typer.Option(None, help="Layout engine: orthogonal or tree."),
) -> None:
    settings = _settings(ctx)
    try:
        document = FileSystemMapRepository().load_by_path(input_path)
        result = MapLayoutBuilder(build_layout_engine(settings, engine)).build(document)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Layout failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{result.map_id} ({result.engine})")
    table.add_column("id")
    table.add_column("depth", justify="right")
    table.add_column("offset", justify="right")
    table.add_column("parents")
    for node in result.nodes:
        table.add_row(
            node.id,
            str(node.depth),
            str(node.offset),
            ", ".join(parent.id for parent in node.parents),
        )
    console.print(table)

    metrics = compute_layout_metrics(result.nodes)
    console.print(
        f"nodes={metrics.nodes} edges={metrics.edges} max_depth={metrics.max_depth} "
        f"max_offset={metrics.max_offset} flipped_edges={metrics.flipped_edges}"
    )
    if metrics.merge_nodes:
        console.print(f"merge nodes: {', '.join(sorted(metrics.merge_nodes))}")


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Map JSON file to validate.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    try:
        document = FileSystemMapRepository().load_by_path(input_path)
        ensure_layout_root(build_activity_graph(document))
    except ValueError as exc:
        console.print(f"[red]Validation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid map:[/] {input_path}")


if __name__ == "__main__":
    app()
