"""
Low-pass input smoothing.

Exponential moving average per axis, suppressing high-frequency
touch jitter before state estimation.
"""

import math
from typing import Optional

from touchmath.core.vector import PlanarVector
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)


def alpha_from_cutoff(cutoff_frequency: float, sample_rate: float = 60.0) -> float:
    """
    Derive the smoothing factor of a first-order RC low-pass.

    rc = 1 / (2*pi*fc), dt = 1 / fs, alpha = dt / (rc + dt)

    Raises:
        ValueError: If cutoff_frequency or sample_rate is not positive
    """
    if cutoff_frequency <= 0 or sample_rate <= 0:
        raise ValueError("cutoff_frequency and sample_rate must be positive")

    rc = 1.0 / (2.0 * math.pi * cutoff_frequency)
    dt = 1.0 / sample_rate
    return dt / (rc + dt)


class LowPassFilter:
    """
    1D exponential smoother.

    alpha=1 passes samples through unchanged; alpha=0 holds the
    first observed value forever.
    """

    def __init__(self, alpha: float):
        # Clamp into [0, 1]
        self._alpha = min(1.0, max(0.0, float(alpha)))
        self._value: Optional[float] = None

    @classmethod
    def from_cutoff(cls, cutoff_frequency: float, sample_rate: float = 60.0) -> "LowPassFilter":
        """Create a filter from cutoff frequency and sample rate (Hz)."""
        return cls(alpha_from_cutoff(cutoff_frequency, sample_rate))

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def value(self) -> Optional[float]:
        """Last filtered value, None before the first sample."""
        return self._value

    def filter(self, value: float) -> float:
        """
        Filter a single sample.

        The first sample is stored unchanged; later samples are blended
        as alpha * value + (1 - alpha) * previous.
        """
        if self._value is None:
            self._value = float(value)
        else:
            self._value = self._alpha * value + (1.0 - self._alpha) * self._value
        return self._value

    def reset(self):
        """Forget history."""
        self._value = None


class LowPassFilter2D:
    """Two independent 1D filters, one per axis, reset together."""

    def __init__(self, alpha: float):
        self._x = LowPassFilter(alpha)
        self._y = LowPassFilter(alpha)

        logger.debug(f"LowPassFilter2D initialized: alpha={self._x.alpha:.4f}")

    @classmethod
    def from_cutoff(cls, cutoff_frequency: float, sample_rate: float = 60.0) -> "LowPassFilter2D":
        return cls(alpha_from_cutoff(cutoff_frequency, sample_rate))

    @property
    def alpha(self) -> float:
        return self._x.alpha

    def filter(self, point: PlanarVector) -> PlanarVector:
        """Filter a 2D point."""
        return PlanarVector(self._x.filter(point.x), self._y.filter(point.y))

    def reset(self):
        self._x.reset()
        self._y.reset()
