"""CLI application entry point for foldcut.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from foldcut import __version__
from foldcut.cli.output import (
    console,
    print_crease_table,
    print_error,
    print_header,
    print_result_summary,
    print_scene_info,
    print_step,
    print_success,
)
from foldcut.config import FoldCutSettings, LoggingConfig
from foldcut.core import FoldAndCutEngine
from foldcut.domain import Viewport
from foldcut.exceptions import FoldCutError, SceneLoadError
from foldcut.io import ResultWriter, SceneReader
from foldcut.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="foldcut",
    help="Compute a straight-skeleton crease pattern for a fold-and-cut scene.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Foldcut[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def creases(
    scene_file: Annotated[
        Path,
        typer.Argument(
            help="Path to the scene JSON file",
            show_default=False,
        ),
    ],
    outer: Annotated[
        str | None,
        typer.Option(
            "--outer",
            help="Id of the shape to use as the outer boundary",
        ),
    ] = None,
    width: Annotated[
        float,
        typer.Option(
            "--width",
            help="Viewport width (cut line length)",
            min=0.0,
        ),
    ] = 1000.0,
    height: Annotated[
        float,
        typer.Option(
            "--height",
            help="Viewport height",
            min=0.0,
        ),
    ] = 700.0,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-creases.json)",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="List every crease",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compute mountain and valley creases for the closed shapes in a scene.

    The largest closed shape (or --outer) is the outer boundary; closed shapes
    inside it are holes.

    Example:
        foldcut scene.json

    This will create scene-creases.json next to the scene file.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not scene_file.exists():
        print_error(
            f"Input file not found: {scene_file}",
            details=f"The file '{scene_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not scene_file.is_file():
        print_error(
            f"Input path is not a file: {scene_file}",
            details="Please provide a path to a scene JSON file.",
        )
        raise typer.Exit(code=1)

    level_name = log_level.upper()
    if level_name not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = FoldCutSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=level_name if not quiet else "WARNING",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    output_path = output if output is not None else ResultWriter.get_result_path(scene_file)
    start = time.perf_counter()

    try:
        if not quiet:
            print_step("Loading scene")
        scene = SceneReader(scene_file).load()
        if not quiet:
            print_scene_info(
                scene_path=str(scene_file),
                shape_count=len(scene.shapes),
                closed_count=sum(1 for s in scene.shapes if s.is_polygon),
            )

        if not quiet:
            print_step("Computing skeleton")
        engine = FoldAndCutEngine(settings, logger=logger)
        result = engine.run_sync(scene, outer, Viewport(width=width, height=height))

        if not quiet:
            print_result_summary(result)
            if verbose:
                print_crease_table(result, settings.export.precision)

        ResultWriter(output_path, settings.export).save(result)

        if not quiet:
            print_success(str(output_path), time.perf_counter() - start)

    except SceneLoadError as e:
        print_error(f"Could not load scene: {e.reason}")
        raise typer.Exit(code=1)
    except FoldCutError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
