"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from vignettify.config import VignetteConfig, VignetteShape
from vignettify.domain import GradationTable

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for chunk compositing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Vignettify[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(image_path: str, image_format: str, mode: str, width: int, height: int) -> None:
    """Print image information.

    Args:
        image_path: Path to the image file
        image_format: File format reported by the decoder (e.g., "PNG")
        mode: Pixel mode (e.g., "RGB", "RGBA")
        width: Width in pixels
        height: Height in pixels
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(image_path)
    line1.append(f" ({image_format})")
    console.print(line1)
    console.print(f"  {width:,}×{height:,} px {SYM_DOT} {mode}")


def print_vignette_config(config: VignetteConfig) -> None:
    """Print the effective vignette settings."""
    r, g, b = config.border_color
    orientation = (
        "n/a" if config.shape is VignetteShape.CIRCLE else f"{config.orientation_degrees:g}°"
    )
    console.print(
        f"  {config.shape.value} {SYM_DOT} coverage {config.coverage_percent:g}% "
        f"{SYM_DOT} orientation {orientation}"
    )
    console.print(
        f"  band {config.band_width_pixels}px in {config.gradation_steps} steps "
        f"{SYM_DOT} centre offset ({config.center_offset_x_percent:g}%, "
        f"{config.center_offset_y_percent:g}%) {SYM_DOT} border #{r:02x}{g:02x}{b:02x}"
    )


def print_gradation_table(table: GradationTable, limit: int = 12) -> None:
    """Print the boundaries and weights of a gradation table.

    Args:
        table: Table to print
        limit: Maximum number of sub-bands listed
    """
    console.print(
        f"  inner ({table.inner_axes[0]:.2f}, {table.inner_axes[1]:.2f}) {SYM_DOT} "
        f"outer ({table.outer_axes[0]:.2f}, {table.outer_axes[1]:.2f}) {SYM_DOT} "
        f"band ({table.band_extent[0]:.2f}, {table.band_extent[1]:.2f})"
    )

    grid = Table(box=None, padding=(0, 2), show_edge=False)
    grid.add_column("step", justify="right")
    grid.add_column("major", justify="right")
    grid.add_column("minor", justify="right")
    grid.add_column("image w", justify="right")
    grid.add_column("border w", justify="right")

    for i in range(min(table.steps, limit)):
        major, minor = table.axes_at(i + 1)
        image_w, border_w = table.weights_at(i)
        grid.add_row(
            str(i + 1),
            f"{major:.2f}",
            f"{minor:.2f}",
            f"{image_w:.3f}",
            f"{border_w:.3f}",
        )
    console.print(grid)
    if table.steps > limit:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{table.steps - limit} more steps)")


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


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


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    preserved: int,
    blended: int,
    border: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        preserved: Pixels left unchanged
        blended: Pixels blended in the band
        border: Pixels replaced by the border colour
        avg_time_ms: Average compositing time per chunk in milliseconds
        min_time_ms: Fastest chunk in milliseconds
        max_time_ms: Slowest chunk in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    console.print(
        f"  {preserved:,} preserved {SYM_DOT} {blended:,} blended {SYM_DOT} {border:,} border"
    )

    if avg_time_ms is not None:
        timing = f"  {avg_time_ms:.1f}ms avg per chunk"
        if min_time_ms is not None and max_time_ms is not None:
            timing += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms)"
        console.print(timing)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress chunks")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of chunks composited before cancellation
        cancelled: Number of pending chunks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} chunks completed {SYM_DOT} {cancelled} chunks cancelled")
    console.print("  No output file created")
