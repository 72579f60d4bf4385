"""
Touch frequency heat map.

Diagnostic accumulator over a grid covering the touchpad; it never
influences cursor behavior.
"""

from typing import Optional

import numpy as np

from touchmath.core.bounds import RectBounds
from touchmath.core.vector import PlanarVector
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)


class TouchHeatMap:
    """Square grid of touch counts."""

    def __init__(self, bounds: RectBounds, resolution: int = 50):
        """
        Initialize heat map.

        Args:
            bounds: Region covered by the grid
            resolution: Cells per axis
        """
        self._bounds = bounds
        self._resolution = resolution
        self._counts = np.zeros((resolution, resolution), dtype=np.int64)

        logger.debug(f"TouchHeatMap initialized: {resolution}x{resolution}")

    @property
    def resolution(self) -> int:
        return self._resolution

    @property
    def total_touches(self) -> int:
        return int(self._counts.sum())

    @property
    def counts(self) -> np.ndarray:
        """Copy of the count grid, indexed [row=y, col=x]."""
        return self._counts.copy()

    def _cell(self, point: PlanarVector) -> Optional[tuple]:
        """Grid cell (row, col) for a point, None when outside or degenerate."""
        b = self._bounds
        if not b.contains(point) or b.width <= 0 or b.height <= 0:
            return None

        col = int((point.x - b.min.x) / b.width * self._resolution)
        row = int((point.y - b.min.y) / b.height * self._resolution)
        last = self._resolution - 1
        return min(last, max(0, row)), min(last, max(0, col))

    def record_touch(self, point: PlanarVector):
        """Count a touch; points outside the bounds are ignored."""
        cell = self._cell(point)
        if cell is not None:
            self._counts[cell] += 1

    def probability(self, at: PlanarVector) -> float:
        """Fraction of recorded touches that fell into the cell at a point."""
        total = self.total_touches
        cell = self._cell(at)
        if cell is None or total == 0:
            return 0.0
        return float(self._counts[cell]) / total

    def mode(self) -> Optional[PlanarVector]:
        """Center of the most touched cell, None when empty."""
        if self.total_touches == 0:
            return None

        row, col = np.unravel_index(int(np.argmax(self._counts)), self._counts.shape)
        b = self._bounds
        return PlanarVector(
            b.min.x + (col + 0.5) * b.width / self._resolution,
            b.min.y + (row + 0.5) * b.height / self._resolution,
        )

    def reset(self):
        self._counts.fill(0)
