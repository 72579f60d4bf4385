"""
Attractor field for snap-to-target behavior.

Point attractors pull with an inverse-square force inside a radius.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from touchmath.core.vector import PlanarVector


@dataclass(frozen=True)
class AttractorField:
    """
    Immutable set of point attractors.

    Replace the whole field to change attractors; never mutate in place.
    """

    attractors: Tuple[PlanarVector, ...]
    strength: float
    radius: float
    capture_radius: float = 5.0
    epsilon: float = 0.01  # Attractors this close exert no force

    @classmethod
    def from_points(
        cls,
        points: Sequence[PlanarVector],
        strength: float,
        radius: float,
        capture_radius: float = 5.0,
        epsilon: float = 0.01,
    ) -> "AttractorField":
        return cls(tuple(points), strength, radius, capture_radius, epsilon)

    def _distances(self, position: PlanarVector) -> Tuple[np.ndarray, np.ndarray]:
        """(offsets towards attractors, distances)."""
        centers = np.array([(a.x, a.y) for a in self.attractors], dtype=np.float64)
        offsets = centers - position.to_array()
        return offsets, np.linalg.norm(offsets, axis=1)

    def force(self, at: PlanarVector) -> PlanarVector:
        """
        Net force at a position.

        Each attractor with epsilon < distance <= radius contributes
        strength / distance^2 directed towards itself.
        """
        if not self.attractors:
            return PlanarVector.zero()

        offsets, distances = self._distances(at)
        active = (distances <= self.radius) & (distances > self.epsilon)
        if not np.any(active):
            return PlanarVector.zero()

        d = distances[active]
        directions = offsets[active] / d[:, None]
        magnitudes = self.strength / (d * d)
        total = (directions * magnitudes[:, None]).sum(axis=0)
        return PlanarVector.from_array(total)

    def nearest(self, to: PlanarVector) -> Optional[PlanarVector]:
        """Closest attractor, or None for an empty field."""
        if not self.attractors:
            return None
        _, distances = self._distances(to)
        return self.attractors[int(np.argmin(distances))]

    def is_captured(self, position: PlanarVector, capture_radius: Optional[float] = None) -> bool:
        """Check if position lies inside the capture radius of some attractor."""
        if not self.attractors:
            return False
        limit = self.capture_radius if capture_radius is None else capture_radius
        _, distances = self._distances(position)
        return bool(np.any(distances < limit))
