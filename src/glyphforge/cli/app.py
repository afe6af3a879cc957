"""CLI application entry point for glyphforge.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from glyphforge import __version__
from glyphforge.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_font_info,
    print_header,
    print_image_info,
    print_problems,
    print_processing_info,
    print_step,
    print_success,
    print_vectorize_result,
)
from glyphforge.config import (
    BinarizeConfig,
    BudgetConfig,
    GlyphForgeSettings,
    LoggingConfig,
    ProcessingConfig,
)
from glyphforge.core import FontProcessor, vectorize, vectorize_svg
from glyphforge.exceptions import (
    FontLoadError,
    FontSaveError,
    GlyphForgeError,
)
from glyphforge.io import FontReader, FontWriter, load_pixel_grid
from glyphforge.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphforge",
    help="Turn glyph images into vector outlines and compile them into fonts.",
    add_completion=False,
    no_args_is_help=True,
)


LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]
MaxBytesOption = Annotated[
    int,
    typer.Option(
        "--max-bytes",
        "-b",
        help="Maximum serialized glyph path size in bytes",
        min=64,
    ),
]
ThresholdOption = Annotated[
    int | None,
    typer.Option(
        "--threshold",
        "-t",
        help="Luminance threshold 0-255 (default: automatic)",
        min=0,
        max=255,
    ),
]
TimeoutOption = Annotated[
    float | None,
    typer.Option(
        "--timeout",
        help="Seconds allowed per image (default: 15)",
        min=0.1,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]GlyphForge[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Turn glyph images into vector outlines and compile them into fonts."""


def _settings(
    max_bytes: int,
    threshold: int | None,
    timeout: float | None,
    workers: int | None,
    log_file: Path | None,
    log_level: str,
) -> GlyphForgeSettings:
    budget = BudgetConfig(max_bytes=max_bytes)
    if timeout is not None:
        budget = budget.model_copy(update={"timeout_seconds": timeout})
    return GlyphForgeSettings(
        binarize=BinarizeConfig(threshold=threshold),
        budget=budget,
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )


@app.command("vectorize")
def vectorize_command(
    image: Annotated[
        Path,
        typer.Argument(
            help="Glyph image (PNG, GIF, BMP, JPEG) or SVG to sanitize",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output SVG path (default: {name}.svg next to the image)",
        ),
    ] = None,
    max_bytes: MaxBytesOption = 250_000,
    threshold: ThresholdOption = None,
    timeout: TimeoutOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Vectorize one glyph image into a single-colour SVG outline.

    Example:
        glyphforge vectorize star.png -o star.svg
    """
    if not image.is_file():
        print_error(
            f"Input file not found: {image}",
            details=f"The file '{image}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    settings = _settings(max_bytes, threshold, timeout, None, log_file, log_level)
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if output is None:
        output = image.with_suffix(".svg")
        if output == image:
            output = image.with_name(f"{image.stem}-clean.svg")

    if not quiet:
        print_header(__version__)

    try:
        if image.suffix.lower() == ".svg":
            if not quiet:
                print_step("Sanitizing SVG")
            result = vectorize_svg(image.read_text(encoding="utf-8"))
        else:
            if not quiet:
                print_step("Loading image")
            grid = load_pixel_grid(image)
            if not quiet:
                print_image_info(str(image), grid.width, grid.height)
                print_step("Vectorizing")
            result = vectorize(grid, settings=settings, logger=logger)

        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.path.svg, encoding="utf-8")

    except GlyphForgeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not read or write file: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        print_vectorize_result(result, settings.budget.max_bytes)
        console.print(f"\n[bold green]{SYM_OK} Saved[/bold green] {output}")


@app.command("build")
def build_command(
    directory: Annotated[
        Path,
        typer.Argument(
            help="Directory of glyph images (file names like U+0041.png set code points)",
            show_default=False,
        ),
    ],
    family: Annotated[
        str,
        typer.Option(
            "--family",
            "-f",
            help="Font family name",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output font path (default: {Family}-Regular.ttf in the directory)",
        ),
    ] = None,
    base: Annotated[
        Path | None,
        typer.Option(
            "--base",
            help="Existing font whose encoded glyphs are kept",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    max_bytes: MaxBytesOption = 250_000,
    threshold: ThresholdOption = None,
    timeout: TimeoutOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="List degraded glyphs and errors",
        ),
    ] = False,
    quiet: QuietOption = False,
) -> None:
    """Build a TrueType font from a directory of glyph images.

    Example:
        glyphforge build icons/ --family "My Icons"

    This will vectorize every image in icons/ and write icons/My-Icons-Regular.ttf.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not directory.is_dir():
        print_error(
            f"Input directory not found: {directory}",
            details="Please provide a directory containing glyph images.",
        )
        raise typer.Exit(code=1)

    if base is not None and not base.is_file():
        print_error(f"Base font not found: {base}")
        raise typer.Exit(code=1)

    settings = _settings(max_bytes, threshold, timeout, workers, log_file, log_level)

    if not quiet:
        print_header(__version__)

    output_path = output or FontWriter.get_output_path(
        directory, family, settings.font.style_name
    )

    try:
        processor = FontProcessor(settings, quiet=quiet)
        images = processor.collect_images(directory)

        if not images and base is None:
            if not quiet:
                console.print("\nNo images found. Nothing to build.")
            raise typer.Exit(code=0)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Processing")
            print_processing_info(len(images), actual_workers, is_auto=(workers is None))

        stats = None
        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Vectorizing {len(images)} images",
                        total=len(images),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.build(
                        directory=directory,
                        family_name=family,
                        output_path=output_path,
                        base_font=base,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.build(
                    directory=directory,
                    family_name=family,
                    output_path=output_path,
                    base_font=base,
                    max_workers=workers,
                )
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=stats.processed_count if stats else 0,
                    cancelled=stats.cancelled_count if stats else 0,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                degraded=stats.degraded_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_image_time_ms,
                min_time_ms=stats.min_image_time_ms,
                max_time_ms=stats.max_image_time_ms,
            )
            if verbose:
                print_problems("Degraded", stats.warnings, "yellow")
                print_problems("Errors", stats.errors, "red")

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except FontSaveError as e:
        print_error(f"Could not save font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphForgeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command("import")
def import_command(
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to a TTF/OTF font file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory for the extracted SVGs (default: {font name}-glyphs)",
        ),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Extract every encoded glyph of a font as U+XXXX.svg files.

    The directory can be edited and rebuilt with `glyphforge build`.

    Example:
        glyphforge import icons.ttf -o icons/
    """
    if not font.is_file():
        print_error(
            f"Input file not found: {font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    output_dir = output or font.with_name(f"{font.stem}-glyphs")
    settings = GlyphForgeSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )

    if not quiet:
        print_header(__version__)
        print_step("Loading font")

    try:
        if not quiet:
            with FontReader(font) as reader:
                print_font_info(
                    font_path=str(font),
                    font_type=reader.format,
                    glyph_count=reader.glyph_count,
                    upm=reader.metrics.units_per_em,
                )
            print_step("Extracting glyphs")

        written = FontProcessor(settings, quiet=quiet).extract(font, output_dir)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphForgeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        console.print(
            f"\n[bold green]{SYM_OK} Extracted[/bold green] {len(written)} glyphs to {output_dir}"
        )


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "42 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
