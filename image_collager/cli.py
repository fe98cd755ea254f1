"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from image_collager.config import CollageConfig
from image_collager.driver import build_collage
from image_collager.errors import CollageError
from image_collager.geometry import Shape
from image_collager.image_source import load_images
from image_collager.layout import iter_placements, partition, validate_request

app = typer.Typer(
    name="image-collager",
    help="Arrange a folder of images into a single rectangle or circle collage.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _fail(exc: CollageError) -> typer.Exit:
    console.print(f"[red]{exc}[/red]")
    return typer.Exit(1)


# Defaults come from CollageConfig - single source of truth
_DEFAULTS = CollageConfig()


# -- make command -------------------------------------------------------

@app.command()
def make(
    shape: Shape = typer.Argument(..., help="'Rectangle' or 'Circle'"),
    rows: int = typer.Argument(..., help="Number of rows"),
    width: int = typer.Argument(..., help="Width each row is scaled to"),
    height: int = typer.Argument(..., help="Target height (accepted, not used by the layout)"),
    directory: Path = typer.Argument(..., help="Folder with source images"),
    output: Path | None = typer.Option(
        _DEFAULTS.output, "--output", "-o", help="Save the collage to this file",
    ),
    show: bool = typer.Option(
        _DEFAULTS.show, "--show/--no-show", help="Open the result in an image viewer",
    ),
    wait: bool = typer.Option(
        _DEFAULTS.wait, "--wait/--no-wait",
        help="Wait for every drawing task (--no-wait may show a partial collage)",
    ),
    workers: int = typer.Option(
        _DEFAULTS.workers, "--workers", "-w", help="Thread-pool size (0 = auto)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Load every image under DIRECTORY and build the collage."""
    _setup_logging(verbose)
    logger = logging.getLogger("image_collager")

    cfg = CollageConfig(
        shape=shape,
        rows=rows,
        width=width,
        height=height,
        input_dir=directory,
        output=output,
        show=show,
        wait=wait,
        workers=workers,
    )

    try:
        validate_request(cfg.rows, cfg.width, cfg.height)
        images = load_images(cfg.input_dir, workers=cfg.workers)
    except CollageError as exc:
        raise _fail(exc) from exc

    if not images:
        console.print(f"\n[yellow]No images found in {cfg.input_dir}/[/yellow]")
        raise typer.Exit(0)

    console.print(Panel.fit(
        f"[bold]IMAGE COLLAGER[/bold]\n"
        f"Shape: {cfg.shape.value}  |  Rows: {cfg.rows}  |  Width: {cfg.width}\n"
        f"Images: {len(images)}  |  Wait for drawing: {cfg.wait}",
        border_style="cyan",
    ))

    try:
        layout, canvas = build_collage(
            images, cfg.rows, cfg.shape, cfg.width,
            wait=cfg.wait, workers=cfg.workers,
        )
    except CollageError as exc:
        raise _fail(exc) from exc

    logger.info(
        "Canvas %dx%d  (%d rows, up to %d columns)",
        canvas.width, canvas.height, layout.rows, layout.max_columns,
    )

    result = canvas.to_image()
    if cfg.output is not None:
        cfg.output.parent.mkdir(parents=True, exist_ok=True)
        try:
            result.save(cfg.output)
        except (OSError, ValueError) as exc:
            console.print(f"[red]Cannot save collage to {cfg.output}: {exc}[/red]")
            raise typer.Exit(1) from exc
        console.print(f"[green]✓[/green] Saved to {cfg.output}  [dim]{result.width}x{result.height}[/dim]")
    if cfg.show:
        result.show()


# -- layout command -----------------------------------------------------

@app.command()
def layout(
    shape: Shape = typer.Argument(..., help="'Rectangle' or 'Circle'"),
    rows: int = typer.Argument(..., help="Number of rows"),
    width: int = typer.Argument(..., help="Width each row is scaled to"),
    height: int = typer.Argument(..., help="Target height (accepted, not used by the layout)"),
    directory: Path = typer.Argument(..., help="Folder with source images"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print where every image would go, without drawing anything."""
    _setup_logging(verbose)

    try:
        validate_request(rows, width, height)
        images = load_images(directory)
        plan = partition(images, rows, shape, width)
    except CollageError as exc:
        raise _fail(exc) from exc

    table = Table(title=f"{plan.shape.value} layout, {len(images)} images")
    for column in ("row", "col", "source", "x", "y", "w", "h"):
        table.add_column(column, justify="right")
    for p in iter_placements(plan.matrix, plan.padding, plan.target_width, plan.shape):
        table.add_row(
            str(p.row), str(p.col), f"{p.image.width}x{p.image.height}",
            str(p.point.x), str(p.point.y), str(p.size.width), str(p.size.height),
        )
    console.print(table)
    console.print(
        f"Content {plan.canvas_width}x{plan.canvas_height}  "
        f"[dim]tallest column {plan.max_column_height}, padding {plan.padding}[/dim]"
    )


if __name__ == "__main__":
    app()
