"""
Planar vector algebra.

Immutable 2D value type used by every stage of the touch pipeline.
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PlanarVector:
    """
    2D vector / point in double precision.

    Value semantics: two vectors with equal components are equal,
    and instances are never mutated after construction.
    """

    x: float
    y: float

    @classmethod
    def zero(cls) -> "PlanarVector":
        """Return the zero vector."""
        return cls(0.0, 0.0)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PlanarVector":
        """Create from a numpy array of shape (2,)."""
        return cls(float(array[0]), float(array[1]))

    def to_array(self) -> np.ndarray:
        """Convert to numpy array."""
        return np.array([self.x, self.y], dtype=np.float64)

    def __add__(self, other: "PlanarVector") -> "PlanarVector":
        return PlanarVector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "PlanarVector") -> "PlanarVector":
        return PlanarVector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "PlanarVector":
        return PlanarVector(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "PlanarVector":
        # Division by zero collapses to the zero vector
        if scalar == 0:
            return PlanarVector.zero()
        return PlanarVector(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "PlanarVector":
        return PlanarVector(-self.x, -self.y)

    def dot(self, other: "PlanarVector") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    @property
    def magnitude(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> "PlanarVector":
        """
        Unit vector in the same direction.

        Returns:
            Unit vector, or the zero vector when this vector is zero
        """
        mag = self.magnitude
        if mag == 0:
            return PlanarVector.zero()
        return PlanarVector(self.x / mag, self.y / mag)

    def distance_to(self, other: "PlanarVector") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    @property
    def angle(self) -> float:
        """Angle in radians, atan2(y, x), range (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def rotated(self, angle: float) -> "PlanarVector":
        """Rotate counter-clockwise by angle (radians)."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return PlanarVector(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
        )

    def lerp(self, other: "PlanarVector", t: float) -> "PlanarVector":
        """Linear interpolation towards other (t=0 -> self, t=1 -> other)."""
        return PlanarVector(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
        )
