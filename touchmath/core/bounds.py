"""
Axis-aligned rectangular bounds with clamping.
"""

from dataclasses import dataclass

import numpy as np

from touchmath.core.vector import PlanarVector


@dataclass(frozen=True)
class RectBounds:
    """
    Axis-aligned box.

    Invariant: min.x <= max.x and min.y <= max.y.
    """

    min: PlanarVector
    max: PlanarVector

    def __post_init__(self):
        """Validate corner ordering."""
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise ValueError(
                f"Invalid bounds: min ({self.min.x}, {self.min.y}) "
                f"exceeds max ({self.max.x}, {self.max.y})"
            )

    @classmethod
    def from_size(cls, width: float, height: float) -> "RectBounds":
        """Create bounds anchored at the origin."""
        return cls(PlanarVector(0.0, 0.0), PlanarVector(float(width), float(height)))

    def clamp(self, point: PlanarVector) -> PlanarVector:
        """
        Clamp a point into the bounds.

        Idempotent: clamping an in-bounds point returns it unchanged.
        """
        return PlanarVector(
            float(np.clip(point.x, self.min.x, self.max.x)),
            float(np.clip(point.y, self.min.y, self.max.y)),
        )

    def contains(self, point: PlanarVector) -> bool:
        """Check if point lies within bounds (edges inclusive)."""
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
        )

    @property
    def center(self) -> PlanarVector:
        return PlanarVector(
            (self.min.x + self.max.x) / 2,
            (self.min.y + self.max.y) / 2,
        )

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def area(self) -> float:
        return self.width * self.height

    def scaled(self, factor: float) -> "RectBounds":
        """
        Scale the bounds about their center.

        Negative factors are treated by magnitude so the invariant holds.
        Zero-area bounds come back unchanged.
        """
        factor = abs(factor)
        center = self.center
        half_width = self.width * factor / 2
        half_height = self.height * factor / 2

        return RectBounds(
            PlanarVector(center.x - half_width, center.y - half_height),
            PlanarVector(center.x + half_width, center.y + half_height),
        )
