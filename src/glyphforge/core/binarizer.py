"""Pixel grid thresholding.

Turns a decoded RGBA grid into a foreground/background mask. Dark opaque
pixels become foreground; transparent pixels are always background. The
threshold is either supplied by the caller or picked with Otsu's method over
the luminance histogram of the opaque pixels.

The mask rule is ``luminance < threshold``, so a threshold of 0 yields an
all-background mask.
"""

from glyphforge.config import BinarizeConfig
from glyphforge.domain import BinaryMask, PixelGrid
from glyphforge.domain.raster import CHANNELS

LEVELS = 256
MID_GREY = 128


def luminance(r: int, g: int, b: int) -> int:
    """Rec. 601 luma of an 8-bit RGB sample, rounded to 0..255."""
    return (r * 299 + g * 587 + b * 114 + 500) // 1000


def luminance_histogram(grid: PixelGrid, alpha_cutoff: int = 128) -> list[int]:
    """Count opaque pixels per luminance level.

    Args:
        grid: Source pixels
        alpha_cutoff: Minimum alpha for a pixel to be counted

    Returns:
        256-entry histogram
    """
    histogram = [0] * LEVELS
    data = grid.data
    for offset in range(0, len(data), CHANNELS):
        if data[offset + 3] >= alpha_cutoff:
            histogram[luminance(data[offset], data[offset + 1], data[offset + 2])] += 1
    return histogram


def otsu_threshold(histogram: list[int]) -> int:
    """Pick the threshold that maximises between-class variance.

    For each candidate level t, pixels ``<= t`` form the dark class and the
    rest the light class; the between-class variance is
    ``w0 * w1 * (mean0 - mean1) ** 2``. The first t reaching the maximum wins.

    Args:
        histogram: Luminance histogram

    Returns:
        Threshold in ``luminance < threshold`` form (best t + 1), or 0 when the
        histogram has fewer than two populated levels
    """
    total = sum(histogram)
    if total == 0:
        return 0

    weighted_total = sum(level * count for level, count in enumerate(histogram))

    weight_dark = 0
    sum_dark = 0
    best_variance = 0.0
    best_level: int | None = None

    for level in range(LEVELS - 1):
        weight_dark += histogram[level]
        if weight_dark == 0:
            continue
        weight_light = total - weight_dark
        if weight_light == 0:
            break

        sum_dark += level * histogram[level]
        mean_dark = sum_dark / weight_dark
        mean_light = (weighted_total - sum_dark) / weight_light

        variance = weight_dark * weight_light * (mean_dark - mean_light) ** 2
        if variance > best_variance:
            best_variance = variance
            best_level = level

    if best_level is None:
        return 0
    return best_level + 1


def _alpha_shape_threshold(histogram: list[int], area: int) -> int:
    # A single opaque level over transparency: the alpha channel carries the
    # shape, so dark ink becomes foreground.
    opaque = sum(histogram)
    if opaque == 0 or opaque == area:
        return 0
    levels = [level for level, count in enumerate(histogram) if count]
    if len(levels) == 1 and levels[0] < MID_GREY:
        return levels[0] + 1
    return 0


def binarize(grid: PixelGrid, config: BinarizeConfig | None = None) -> BinaryMask:
    """Threshold a pixel grid into a mask.

    Args:
        grid: Source pixels
        config: Threshold settings (explicit threshold or automatic)

    Returns:
        BinaryMask with the grid's dimensions. Uniform or fully transparent
        images yield an all-background mask.
    """
    config = config or BinarizeConfig()
    cutoff = config.alpha_cutoff

    if config.threshold is None:
        histogram = luminance_histogram(grid, cutoff)
        threshold = otsu_threshold(histogram)
        if threshold == 0:
            threshold = _alpha_shape_threshold(histogram, grid.area)
    else:
        threshold = config.threshold

    mask = bytearray(grid.area)
    data = grid.data
    if threshold > 0:
        for index in range(grid.area):
            offset = index * CHANNELS
            if data[offset + 3] < cutoff:
                continue
            if luminance(data[offset], data[offset + 1], data[offset + 2]) < threshold:
                mask[index] = 1

    return BinaryMask(width=grid.width, height=grid.height, data=mask, threshold=threshold)


def resize_nearest(grid: PixelGrid, width: int, height: int) -> PixelGrid:
    """Nearest-neighbour resample to an exact size."""
    if width == grid.width and height == grid.height:
        return grid

    src = grid.data
    dst = bytearray(width * height * CHANNELS)
    for y in range(height):
        sy = (y * grid.height) // height
        for x in range(width):
            sx = (x * grid.width) // width
            si = (sy * grid.width + sx) * CHANNELS
            di = (y * width + x) * CHANNELS
            dst[di : di + CHANNELS] = src[si : si + CHANNELS]
    return PixelGrid(width=width, height=height, data=bytes(dst))


def fit_within(grid: PixelGrid, max_dimension: int | None) -> PixelGrid:
    """Shrink a grid so neither side exceeds max_dimension, keeping aspect."""
    if max_dimension is None:
        return grid
    if grid.width <= max_dimension and grid.height <= max_dimension:
        return grid
    scale = min(max_dimension / grid.width, max_dimension / grid.height)
    width = max(1, int(grid.width * scale))
    height = max(1, int(grid.height * scale))
    return resize_nearest(grid, width, height)


def downscale(grid: PixelGrid, factor: float, min_size: int = 16) -> PixelGrid:
    """Scale a grid down by a factor, never below min_size per side.

    A side already below min_size keeps its size. Returns the same grid when
    nothing would change.
    """
    width = max(min(min_size, grid.width), int(grid.width * factor))
    height = max(min(min_size, grid.height), int(grid.height * factor))
    return resize_nearest(grid, width, height)
