"""
Simplified 2D constant-velocity Kalman estimator.

Reduced fidelity compared to a textbook Kalman filter:
- Covariance is two scalars (position, velocity) instead of a 4x4 matrix
- The velocity estimate is overwritten with gain * innovation on every
  update instead of being blended
"""

from typing import Tuple

from touchmath.core.vector import PlanarVector
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)


class KalmanFilter2D:
    """Position/velocity estimator with scalar uncertainty bookkeeping."""

    def __init__(
        self,
        initial_position: PlanarVector,
        process_noise: Tuple[float, float] = (0.1, 0.01),
        measurement_noise: float = 1.0,
        initial_uncertainty: float = 1000.0,
    ):
        """
        Initialize estimator.

        Args:
            initial_position: Starting position estimate
            process_noise: (position, velocity) variance added per predict
            measurement_noise: Measurement variance
            initial_uncertainty: Variance assigned on construction and reset
        """
        self._process_noise_p, self._process_noise_v = process_noise
        self._measurement_noise = measurement_noise
        self._initial_uncertainty = initial_uncertainty

        self._x = 0.0
        self._y = 0.0
        self._vx = 0.0
        self._vy = 0.0
        self._cov_p = initial_uncertainty
        self._cov_v = initial_uncertainty
        self.reset(initial_position)

        logger.debug(
            f"KalmanFilter2D initialized: q=({self._process_noise_p}, "
            f"{self._process_noise_v}), r={measurement_noise}"
        )

    def predict(self, dt: float):
        """Advance position by velocity * dt and inflate uncertainty."""
        self._x += self._vx * dt
        self._y += self._vy * dt

        self._cov_p += self._process_noise_p
        self._cov_v += self._process_noise_v

    def update(self, measurement: PlanarVector):
        """Correct the estimate with a position measurement."""
        denominator = self._cov_p + self._measurement_noise
        # Zero total variance: trust the measurement completely
        gain = self._cov_p / denominator if denominator > 0 else 1.0

        innovation_x = measurement.x - self._x
        innovation_y = measurement.y - self._y

        self._x += gain * innovation_x
        self._y += gain * innovation_y

        # Overwrite, not blend
        self._vx = gain * innovation_x
        self._vy = gain * innovation_y

        self._cov_p *= 1.0 - gain
        self._cov_v *= 1.0 - 0.5 * gain

    @property
    def position(self) -> PlanarVector:
        return PlanarVector(self._x, self._y)

    @property
    def velocity(self) -> PlanarVector:
        return PlanarVector(self._vx, self._vy)

    def predicted_position(self, dt: float) -> PlanarVector:
        """Position extrapolated dt ahead without changing state."""
        return PlanarVector(self._x + self._vx * dt, self._y + self._vy * dt)

    @property
    def position_variance(self) -> float:
        return self._cov_p

    @property
    def velocity_variance(self) -> float:
        return self._cov_v

    def reset(self, position: PlanarVector):
        """Restart at position with zero velocity and maximal uncertainty."""
        self._x = position.x
        self._y = position.y
        self._vx = 0.0
        self._vy = 0.0
        self._cov_p = self._initial_uncertainty
        self._cov_v = self._initial_uncertainty
