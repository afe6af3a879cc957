"""Vectorization entry points.

Each call is a self-contained, single-threaded pass over one image with no
shared state, so independent calls may run in parallel threads or processes.
"""

import structlog

from glyphforge.config import GlyphForgeSettings, get_default_settings
from glyphforge.core.budget import Budgeter
from glyphforge.core.deadline import Deadline
from glyphforge.core.sanitizer import sanitize_svg
from glyphforge.domain import PixelGrid, VectorizeResult, VectorizeStatus
from glyphforge.io.image import decode_pixel_grid


def vectorize(
    grid: PixelGrid,
    settings: GlyphForgeSettings | None = None,
    deadline: Deadline | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> VectorizeResult:
    """Vectorize a decoded pixel grid under the configured size budget.

    Args:
        grid: Decoded RGBA image
        settings: Pipeline settings (defaults when omitted)
        deadline: Wall-clock limit; built from ``settings.budget.timeout_seconds``
            when omitted
        logger: Receives per-round debug events

    Returns:
        VectorizeResult, possibly flagged as degraded

    Raises:
        ConversionTimeoutError: If the deadline passes; nothing is returned
    """
    settings = settings or get_default_settings()
    if deadline is None:
        deadline = Deadline(settings.budget.timeout_seconds)

    budgeter = Budgeter(
        settings.budget,
        binarize_config=settings.binarize,
        tracer_config=settings.tracer,
        logger=logger,
    )
    return budgeter.run(grid, deadline=deadline)


def vectorize_image(
    data: bytes,
    settings: GlyphForgeSettings | None = None,
    deadline: Deadline | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> VectorizeResult:
    """Decode encoded image bytes and vectorize them.

    Raises:
        InvalidImageError: If the bytes do not decode to a non-empty image
        ConversionTimeoutError: If the deadline passes
    """
    return vectorize(decode_pixel_grid(data), settings=settings, deadline=deadline, logger=logger)


def vectorize_svg(svg: str) -> VectorizeResult:
    """Accept caller-supplied vector input through the sanitizer.

    Vector input is not traced, so the result carries no round or contour counts.

    Raises:
        InvalidPathError: If the text is not a parseable SVG document
        EmbeddedRasterRejectedError: If raster content survives cleaning
    """
    path = sanitize_svg(svg)
    return VectorizeResult(path=path, status=VectorizeStatus.OK)
