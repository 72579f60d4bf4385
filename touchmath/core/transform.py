"""
Coordinate transformation between bounded spaces.

Maps touchpad coordinates into target-screen coordinates (and back).
"""

from dataclasses import dataclass

from touchmath.core.bounds import RectBounds
from touchmath.core.vector import PlanarVector
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)

# Determinant below which the scale matrix is treated as singular
_SINGULAR_EPSILON = 1e-4


@dataclass(frozen=True)
class CoordinateSpace:
    """A named bounded coordinate space."""

    bounds: RectBounds
    identifier: str


TOUCHPAD_SPACE = CoordinateSpace(RectBounds.from_size(250, 180), "touchpad")
TARGET_SPACE = CoordinateSpace(RectBounds.from_size(372, 824), "target")


class CoordinateTransform:
    """
    Affine mapping from a source space to a target space.

    The linear part is a diagonal scale matrix:
        [x']   [sx  0 ] [x - src.min.x]   [dst.min.x]
        [y'] = [0   sy] [y - src.min.y] + [dst.min.y]

    A source axis of zero extent maps with scale 1.
    """

    def __init__(self, source: CoordinateSpace, target: CoordinateSpace):
        """
        Initialize transform.

        Args:
            source: Space the input coordinates live in
            target: Space to map into
        """
        self._source = source
        self._target = target

        src = source.bounds
        dst = target.bounds
        scale_x = dst.width / src.width if src.width > 0 else 1.0
        scale_y = dst.height / src.height if src.height > 0 else 1.0

        # Row-major 2x2 matrix (a, b, c, d)
        self._matrix = (scale_x, 0.0, 0.0, scale_y)

        logger.debug(
            f"CoordinateTransform {source.identifier} -> {target.identifier}: "
            f"scale=({scale_x:.4f}, {scale_y:.4f})"
        )

    @property
    def source(self) -> CoordinateSpace:
        return self._source

    @property
    def target(self) -> CoordinateSpace:
        return self._target

    @property
    def scale(self) -> PlanarVector:
        """Per-axis scale factors."""
        return PlanarVector(self._matrix[0], self._matrix[3])

    def transform(self, point: PlanarVector) -> PlanarVector:
        """Map a point from source to target space."""
        shifted = point - self._source.bounds.min
        return self.transform_vector(shifted) + self._target.bounds.min

    def inverse_transform(self, point: PlanarVector) -> PlanarVector:
        """
        Map a point from target back to source space.

        Returns the point unchanged if the matrix is singular.
        """
        a, b, c, d = self._matrix
        det = a * d - b * c
        if abs(det) <= _SINGULAR_EPSILON:
            return point

        shifted = point - self._target.bounds.min
        unscaled = PlanarVector(
            (d * shifted.x - b * shifted.y) / det,
            (-c * shifted.x + a * shifted.y) / det,
        )
        return unscaled + self._source.bounds.min

    def transform_vector(self, vector: PlanarVector) -> PlanarVector:
        """Map a displacement (no translation)."""
        a, b, c, d = self._matrix
        return PlanarVector(
            a * vector.x + b * vector.y,
            c * vector.x + d * vector.y,
        )
