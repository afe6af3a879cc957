"""Parallel batch building of fonts from image directories.

This module coordinates the full build workflow: every image in a directory
is vectorized in a worker process, the resulting glyph paths are given code
points, and the assembled font is compiled and written.

Key components:
- process_image: Top-level picklable function for parallel execution
- codepoint_from_name: Code point encoded in an image file name
- FontProcessor: Main orchestrator class for batch builds
"""

import random
import re
import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from glyphforge.config import GlyphForgeSettings
from glyphforge.core.codepoints import format_codepoint, normalize_codepoint
from glyphforge.core.pipeline import vectorize_image, vectorize_svg
from glyphforge.core.workspace import FontWorkspace
from glyphforge.domain import GlyphPath, VectorizeStatus
from glyphforge.exceptions import CodepointError, GlyphForgeError
from glyphforge.io import FontReader, FontWriter
from glyphforge.utils import ProcessingLogger, ProcessingStats, configure_logging

_CODEPOINT_NAME = re.compile(
    r"^(?:(?P<prefixed>(?:u\+|uni|u|0x)[0-9a-f]{4,6})|(?P<bare>[0-9a-f]{4,6}))(?:[-_. ].*)?$",
    re.IGNORECASE,
)


def codepoint_from_name(stem: str) -> int | None:
    """Code point named by an image file stem, if any.

    Recognises ``U+0041``, ``uni0041``, ``u1F600``, ``0x41AB`` and bare hex
    such as ``0041`` or ``E000_star``. Bare hex made only of letters
    (``face``, ``cafe``) reads as a word, not a code point.
    """
    match = _CODEPOINT_NAME.match(stem)
    if match is None:
        return None

    if match.group("prefixed"):
        text = re.sub(r"^(?:u\+|uni|u|0x)", "", match.group("prefixed"), flags=re.IGNORECASE)
    else:
        text = match.group("bare")
        if not any(ch.isdigit() for ch in text):
            return None

    try:
        return normalize_codepoint(text)
    except CodepointError:
        return None


def process_image(task: dict[str, Any], settings_dict: dict[str, Any]) -> dict[str, Any]:
    """Vectorize a single image file.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        task: {"name": display name, "path": file path as string}
        settings_dict: Serialized settings (from GlyphForgeSettings.model_dump())

    Returns:
        Dictionary containing either:
        - Success: {"result": VectorizeResult.to_dict(), "duration_ms": float}
        - Error: {"error": str, "error_type": str, "image": str, "traceback": str,
          "duration_ms": float}
    """
    start_time = time.time()

    try:
        settings = GlyphForgeSettings.model_validate(settings_dict)
        path = Path(task["path"])

        if path.suffix.lower() == ".svg":
            result = vectorize_svg(path.read_text(encoding="utf-8"))
        else:
            result = vectorize_image(path.read_bytes(), settings=settings)

        return {
            "result": result.to_dict(),
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "image": task.get("name", "unknown"),
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class FontProcessor:
    """Orchestrates parallel font builds.

    Manages the complete workflow:
    1. Collect image files from a directory
    2. Vectorize images in parallel using worker processes
    3. Assign code points (file-name code points first, then PUA allocation)
    4. Assemble and compile the font
    5. Write the font file

    Example:
        settings = GlyphForgeSettings()
        processor = FontProcessor(settings)
        stats = processor.build(
            directory=Path("icons/"),
            family_name="My Icons",
            output_path=Path("MyIcons-Regular.ttf"),
        )
    """

    def __init__(self, config: GlyphForgeSettings, quiet: bool = False) -> None:
        """Initialize font processor with configuration.

        Args:
            config: Settings for vectorization, code points, font and logging
            quiet: Suppress console logging except errors
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )

    def collect_images(self, directory: Path) -> list[Path]:
        """Image files in a directory, sorted by name.

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        if not directory.is_dir():
            raise FileNotFoundError(f"Image directory not found: {directory}")

        suffixes = {s.lower() for s in self.config.processing.image_suffixes}
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in suffixes
        )

    def build(
        self,
        directory: Path,
        family_name: str,
        output_path: Path | None = None,
        base_font: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Build a font from a directory of glyph images.

        Args:
            directory: Directory holding the glyph images
            family_name: Family name of the new font
            output_path: Path of the font file (derived from the family if None)
            base_font: Existing font whose encoded glyphs seed the new one
            max_workers: Maximum worker processes (None = settings, then auto-detect)
            progress_callback: Optional callback(completed, total, image_name, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If the directory or base font does not exist
            FontLoadError: If the base font cannot be read
            FontSaveError: If the font cannot be written
            KeyboardInterrupt: If processing is cancelled by user
        """
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if output_path is None:
            output_path = FontWriter.get_output_path(
                directory, family_name, self.config.font.style_name
            )

        images = self.collect_images(directory)

        self.logger.info(
            "Starting font build",
            input=str(directory),
            output=str(output_path),
            images=len(images),
            max_workers=max_workers,
        )

        workspace = FontWorkspace(
            family_name,
            font_config=self.config.font,
            codepoint_config=self.config.codepoints,
            rng=random.Random(family_name),
            logger=self.logger,
        )

        if base_font is not None:
            self._seed_from_font(workspace, base_font)

        results = self._process_images_parallel(
            images=images,
            max_workers=max_workers,
            processing_logger=processing_logger,
            progress_callback=progress_callback,
        )

        self._add_results(workspace, images, results, processing_logger)

        data = workspace.compile()
        FontWriter(output_path).write(data)

        stats.end_time = time.time()

        self.logger.info(
            "Build complete",
            output=str(output_path),
            glyphs=len(workspace),
            ok=stats.ok_count,
            placeholder=stats.placeholder_count,
            trimmed=stats.trimmed_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def extract(self, font_path: Path, output_dir: Path) -> list[Path]:
        """Write every encoded glyph of a font as ``U+XXXX.svg``.

        The files can be edited and fed back to ``build``.

        Raises:
            FileNotFoundError: If the font does not exist
            FontLoadError: If the font cannot be read
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []

        with FontReader(font_path) as reader:
            for codepoint, path in reader.iter_glyph_paths():
                target = output_dir / f"U+{format_codepoint(codepoint)}.svg"
                target.write_text(path.svg, encoding="utf-8")
                written.append(target)

        self.logger.info("Font extracted", input=str(font_path), glyphs=len(written))
        return written

    def _seed_from_font(self, workspace: FontWorkspace, base_font: Path) -> None:
        with FontReader(base_font) as reader:
            count = 0
            for codepoint, path in reader.iter_glyph_paths():
                workspace.add_glyph(path, codepoint)
                count += 1

        self.logger.info("Seeded from base font", font=str(base_font), glyphs=count)

    def _process_images_parallel(
        self,
        images: list[Path],
        max_workers: int | None,
        processing_logger: ProcessingLogger,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, dict[str, Any]]:
        """Vectorize images in parallel using ProcessPoolExecutor.

        Returns:
            Dictionary mapping image names to successful worker outcomes
            (serialized VectorizeResult plus duration); failed images are absent
        """
        results: dict[str, dict[str, Any]] = {}
        if not images:
            self.logger.info("No images to process")
            return results

        stats = processing_logger.stats
        settings_dict = self.config.model_dump()
        tasks = {image.name: {"name": image.name, "path": str(image)} for image in images}

        self.logger.info(
            "Starting parallel processing",
            image_count=len(tasks),
            max_workers=max_workers,
        )

        total = len(tasks)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for name, task in tasks.items():
                processing_logger.log_image_start(name)
                future = executor.submit(process_image, task, settings_dict)
                pending_futures[future] = name

            try:
                for future in as_completed(pending_futures):
                    image_name = pending_futures.pop(future)
                    success = False

                    try:
                        outcome = future.result()

                        if "error" in outcome:
                            processing_logger.log_image_error(
                                image_name=image_name,
                                error=f"{outcome['error_type']}: {outcome['error']}",
                                traceback=outcome.get("traceback"),
                            )
                        else:
                            success = True
                            results[image_name] = outcome
                            stats.timings_ms.append(outcome.get("duration_ms", 0.0))

                    except Exception as e:
                        processing_logger.log_image_error(
                            image_name=image_name,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, image_name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results

    def _add_results(
        self,
        workspace: FontWorkspace,
        images: list[Path],
        results: dict[str, dict[str, Any]],
        processing_logger: ProcessingLogger,
    ) -> None:
        """Add vectorized glyphs to the workspace in file-name order.

        Images whose names carry a code point are added before the rest, so
        allocation never takes a value a later file asks for.
        """
        requested: list[tuple[Path, int]] = []
        allocated: list[Path] = []
        for image in images:
            if image.name not in results:
                continue
            codepoint = codepoint_from_name(image.stem)
            if codepoint is None:
                allocated.append(image)
            else:
                requested.append((image, codepoint))

        ordered: list[tuple[Path, int | None]] = [*requested, *((img, None) for img in allocated)]

        for image, codepoint in ordered:
            outcome = results[image.name]
            result = outcome["result"]
            path = GlyphPath.from_dict(result["path"])
            status = VectorizeStatus(result["status"])

            try:
                assigned = workspace.add_glyph(path, codepoint)
            except GlyphForgeError as e:
                processing_logger.log_image_error(image_name=image.name, error=e)
                continue

            processing_logger.log_image_complete(
                image_name=image.name,
                codepoint=assigned,
                status=status,
                size=path.size,
                duration_ms=outcome.get("duration_ms", 0.0),
            )
            for reason in result["degradations"]:
                processing_logger.log_degradation(image.name, reason)
