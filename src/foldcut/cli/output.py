"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from foldcut.domain import ResultBundle

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Foldcut[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_scene_info(scene_path: str, shape_count: int, closed_count: int) -> None:
    """Print scene information.

    Args:
        scene_path: Path to the scene file
        shape_count: Total number of shapes
        closed_count: Number of closed shapes
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(scene_path)
    console.print(line)
    console.print(f"  {shape_count} shapes {SYM_DOT} {closed_count} closed")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_result_summary(result: ResultBundle) -> None:
    """Print rings, skeleton and crease counts for a result."""
    holes = len(result.rings.holes)
    plural = "hole" if holes == 1 else "holes"
    console.print(f"  outer {result.rings.outer_id} {SYM_DOT} {holes} {plural}")
    console.print(
        f"  {len(result.skeleton.vertices)} skeleton vertices "
        f"({len(result.skeleton.interior_vertices)} interior) {SYM_DOT} "
        f"{len(result.skeleton.faces)} faces"
    )
    console.print(
        f"  [red]{len(result.mountains)} mountain[/red] {SYM_DOT} "
        f"[blue]{len(result.valleys)} valley[/blue]"
    )
    cut = result.cut_line
    console.print(f"  cut line y = {cut.a.y:.3f} ({cut.a.x:.0f} to {cut.b.x:.0f})")


def print_crease_table(result: ResultBundle, precision: int = 3) -> None:
    """Print every crease in a table, in production order."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("A")
    table.add_column("B")
    table.add_column("Source")

    for idx, crease in enumerate(result.creases, start=1):
        style = "red" if crease.kind.value == "M" else "blue"
        table.add_row(
            str(idx),
            Text(crease.kind.value, style=style),
            f"({crease.a.x:.{precision}f}, {crease.a.y:.{precision}f})",
            f"({crease.b.x:.{precision}f}, {crease.b.y:.{precision}f})",
            crease.source or "",
        )

    console.print(table)


def print_success(output_path: str, total_time_s: float) -> None:
    """Print success message.

    Args:
        output_path: Path to output file
        total_time_s: Total run time in seconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
