"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages.
"""


from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

from glyphforge.domain import VectorizeResult

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_WARN = "!"  # Degraded result
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for image processing.

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
    """Print application header."""
    console.print(f"\n[bold]GlyphForge[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(image_path: str, width: int, height: int) -> None:
    """Print decoded image information."""
    line = Text("  ")
    line.append(image_path)
    console.print(line)
    console.print(f"  {width} x {height} px")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_vectorize_result(result: VectorizeResult, budget: int) -> None:
    """Print the outcome of a single vectorization, warning when degraded."""
    size = result.path.size
    if result.degraded:
        console.print(
            f"  [yellow]{SYM_WARN} {result.status.value}[/yellow] {SYM_DOT} "
            f"{size:,} / {budget:,} bytes"
        )
        for degradation in result.degradations:
            console.print(f"  [yellow]{degradation}[/yellow]")
    else:
        console.print(
            f"  [green]{SYM_OK} ok[/green] {SYM_DOT} {size:,} / {budget:,} bytes"
        )

    if result.rounds:
        console.print(
            f"  {result.contour_count} contours {SYM_DOT} {result.rounds} rounds "
            f"{SYM_DOT} epsilon {result.epsilon:.2f}"
        )


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


def print_processing_info(images: int, workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        images: Number of images found
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(
        f"  {images} images {SYM_DOT} {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel"
    )


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    processed: int,
    degraded: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        processed: Number of glyphs added to the font
        degraded: Glyphs that are placeholders or trimmed
        errors: Number of images that produced no glyph
        avg_time_ms: Average vectorization time per image in milliseconds
        min_time_ms: Minimum vectorization time per image in milliseconds
        max_time_ms: Maximum vectorization time per image in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    degraded_style = "yellow" if degraded > 0 else "green"
    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} glyphs {SYM_DOT} "
        f"[{degraded_style}]{degraded} degraded[/{degraded_style}] {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_problems(title: str, entries: list[tuple[str, str]], style: str, limit: int = 20) -> None:
    """Print per-image warnings or errors."""
    if not entries:
        return
    console.print(f"\n[bold {style}]{title}[/bold {style}]")
    for name, message in entries[:limit]:
        line = Text(f"  {name}: ")
        line.append(message, style=style)
        console.print(line)
    if len(entries) > limit:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(entries) - limit} more)")


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
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress images")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of images vectorized before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} images completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
