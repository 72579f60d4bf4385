"""
Probability model of touch positions.
"""

from typing import Optional

import numpy as np
from scipy import stats

from touchmath.core.vector import PlanarVector


class Gaussian2D:
    """
    Bivariate normal distribution.

    Parameterized by per-axis standard deviation and a correlation
    coefficient in [-1, 1].
    """

    def __init__(
        self,
        mean: PlanarVector,
        standard_deviation: PlanarVector,
        correlation: float = 0.0,
    ):
        self._mean = mean
        sx = standard_deviation.x
        sy = standard_deviation.y
        xy = correlation * sx * sy
        self._covariance = np.array([[sx * sx, xy], [xy, sy * sy]], dtype=np.float64)

    @property
    def covariance(self) -> np.ndarray:
        return self._covariance.copy()

    @property
    def determinant(self) -> float:
        return float(np.linalg.det(self._covariance))

    def probability(self, at: PlanarVector) -> float:
        """Density at a point; 0 for a singular covariance."""
        if self.determinant <= 0:
            return 0.0
        return float(
            stats.multivariate_normal.pdf(
                at.to_array(), mean=self._mean.to_array(), cov=self._covariance
            )
        )

    def sample(self, rng: Optional[np.random.Generator] = None) -> PlanarVector:
        """Draw one point (singular covariances sample on the degenerate line)."""
        rng = rng if rng is not None else np.random.default_rng()
        draw = rng.multivariate_normal(self._mean.to_array(), self._covariance)
        return PlanarVector.from_array(draw)

    def expected_value(self) -> PlanarVector:
        return self._mean
