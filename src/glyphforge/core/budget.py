"""Size-budgeted vectorization.

The budgeter keeps a glyph's serialized SVG under a byte budget while giving
up as little shape as it can. Each round simplifies every contour at the
current tolerance and serializes the result:

1. If the document fits the budget, it is returned.
2. Otherwise the tolerance grows by a fixed factor and the next round runs.
3. After a fixed round the source grid is also downscaled, re-thresholded
   and re-traced.
4. When every round has failed, the smallest third of the subpaths is
   dropped and the result is returned whether it fits or not.

A mask whose contours enclose no area (blank images, hairline strokes)
produces a centred placeholder square.
Degraded outcomes are flagged on the result, never raised.
"""

import structlog

from glyphforge.config import BinarizeConfig, BudgetConfig, TracerConfig
from glyphforge.core.binarizer import binarize, downscale, fit_within
from glyphforge.core.deadline import Deadline
from glyphforge.core.geometry import signed_area
from glyphforge.core.serializer import PathSerializer, drawable_contours, placeholder_contour
from glyphforge.core.simplifier import simplify_contours
from glyphforge.core.tracer import ContourTracer
from glyphforge.domain import Contour, PixelGrid, VectorizeResult, VectorizeStatus
from glyphforge.exceptions import NoUsableContoursError, OutputTooLargeError


def trim_contours(contours: list[Contour], fraction: float) -> list[Contour]:
    """Drop the smallest ``fraction`` of contours by enclosed area.

    At least one contour is dropped when there is more than one; a single
    contour is kept. Survivors keep their emission order.

    Args:
        contours: Contours in emission order
        fraction: Share of contours to drop

    Returns:
        Remaining contours
    """
    if len(contours) <= 1:
        return list(contours)

    drop_count = max(1, int(len(contours) * fraction))
    by_size = sorted(
        range(len(contours)),
        key=lambda idx: (abs(signed_area(contours[idx].points)), -idx),
    )
    dropped = set(by_size[:drop_count])
    return [c for idx, c in enumerate(contours) if idx not in dropped]


class Budgeter:
    """Drives simplification (and downscaling) until the output fits.

    Example:
        budgeter = Budgeter(BudgetConfig(max_bytes=20_000))
        result = budgeter.run(grid)
        if result.degraded:
            warn(result.degradations)
    """

    def __init__(
        self,
        config: BudgetConfig | None = None,
        binarize_config: BinarizeConfig | None = None,
        tracer_config: TracerConfig | None = None,
        serializer: PathSerializer | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.config = config or BudgetConfig()
        self.binarize_config = binarize_config or BinarizeConfig()
        self.tracer = ContourTracer(tracer_config)
        self.serializer = serializer or PathSerializer()
        self._logger = logger

    def run(self, grid: PixelGrid, deadline: Deadline | None = None) -> VectorizeResult:
        """Vectorize a grid within the configured budget.

        Args:
            grid: Decoded source image
            deadline: Optional wall-clock limit

        Returns:
            VectorizeResult; ``status`` is OK when the first fitting round
            was found, PLACEHOLDER when nothing encloses area, TRIMMED otherwise

        Raises:
            ConversionTimeoutError: If the deadline passes
        """
        config = self.config
        deadline = deadline or Deadline.unlimited()

        grid = fit_within(grid, config.max_dimension)
        contours = drawable_contours(self._trace(grid, deadline))
        if not contours:
            return self._placeholder(grid)

        epsilon = config.initial_epsilon
        simplified: list[Contour] = []

        for round_no in range(1, config.max_rounds + 1):
            deadline.check()
            simplified = drawable_contours(simplify_contours(contours, epsilon, deadline))
            if not simplified:
                simplified = contours
            path = self.serializer.serialize(simplified, grid.width, grid.height)
            self._log(
                "Budget round",
                round=round_no,
                epsilon=round(epsilon, 3),
                size=path.size,
                budget=config.max_bytes,
                contours=len(simplified),
                grid=f"{grid.width}x{grid.height}",
            )

            if path.size <= config.max_bytes:
                return VectorizeResult(
                    path=path,
                    status=VectorizeStatus.OK,
                    epsilon=epsilon,
                    rounds=round_no,
                    contour_count=len(simplified),
                )

            if round_no == config.max_rounds:
                break

            epsilon *= config.epsilon_growth

            if round_no == config.downscale_after_round:
                smaller = downscale(grid, config.downscale_factor, config.min_downscale_size)
                if smaller is not grid:
                    grid = smaller
                    contours = drawable_contours(self._trace(grid, deadline))
                    if not contours:
                        return self._placeholder(grid)

        trimmed = trim_contours(simplified, config.trim_fraction)
        path = self.serializer.serialize(trimmed, grid.width, grid.height)

        degradations = []
        if path.size > config.max_bytes:
            degradations.append(OutputTooLargeError(path.size, config.max_bytes))

        self._log(
            "Budget exhausted, trimmed paths",
            dropped=len(simplified) - len(trimmed),
            size=path.size,
            budget=config.max_bytes,
            fits=path.size <= config.max_bytes,
        )

        return VectorizeResult(
            path=path,
            status=VectorizeStatus.TRIMMED,
            epsilon=epsilon,
            rounds=config.max_rounds,
            contour_count=len(trimmed),
            degradations=tuple(degradations),
        )

    def _trace(self, grid: PixelGrid, deadline: Deadline) -> list[Contour]:
        mask = binarize(grid, self.binarize_config)
        return self.tracer.trace(mask, deadline=deadline)

    def _placeholder(self, grid: PixelGrid) -> VectorizeResult:
        square = placeholder_contour(grid.width, grid.height, self.config.placeholder_fraction)
        path = self.serializer.serialize([square], grid.width, grid.height)
        self._log("No usable contours, emitted placeholder", grid=f"{grid.width}x{grid.height}")
        return VectorizeResult(
            path=path,
            status=VectorizeStatus.PLACEHOLDER,
            contour_count=1,
            degradations=(NoUsableContoursError(grid.width, grid.height),),
        )

    def _log(self, event: str, **fields: object) -> None:
        if self._logger is not None:
            self._logger.debug(event, **fields)
