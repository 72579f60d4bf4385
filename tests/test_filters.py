"""
Tests for the low-pass filter and the simplified Kalman estimator.
"""

import math

import pytest

from touchmath.core.vector import PlanarVector
from touchmath.filters.kalman import KalmanFilter2D
from touchmath.filters.smoothing import LowPassFilter, LowPassFilter2D, alpha_from_cutoff


class TestLowPassFilter:
    """Tests for LowPassFilter."""

    def test_alpha_from_cutoff(self):
        """Test alpha = dt / (rc + dt)."""
        rc = 1.0 / (2.0 * math.pi * 5.0)
        dt = 1.0 / 60.0

        assert alpha_from_cutoff(5.0, 60.0) == pytest.approx(dt / (rc + dt))
        assert LowPassFilter.from_cutoff(5.0).alpha == pytest.approx(0.3437, abs=1e-4)

    def test_invalid_cutoff(self):
        """Test that non-positive frequencies are rejected."""
        with pytest.raises(ValueError, match="must be positive"):
            alpha_from_cutoff(0.0, 60.0)

    def test_first_sample_passes_through(self):
        """Test that the first sample is stored unchanged."""
        lpf = LowPassFilter(0.25)

        assert lpf.value is None
        assert lpf.filter(8.0) == 8.0

    def test_blending(self):
        """Test alpha * value + (1 - alpha) * previous."""
        lpf = LowPassFilter(0.25)
        lpf.filter(8.0)

        assert lpf.filter(0.0) == pytest.approx(6.0)
        assert lpf.filter(6.0) == pytest.approx(6.0)

    @pytest.mark.parametrize("samples", [[1.0, -5.0, 3.25, 100.0], [0.0, 0.0, 7.5]])
    def test_alpha_one_is_identity(self, samples):
        """Test that alpha=1 returns every sample unchanged."""
        lpf = LowPassFilter(1.0)

        assert [lpf.filter(s) for s in samples] == samples

    def test_alpha_zero_holds_first(self):
        """Test that alpha=0 stays at the first sample."""
        lpf = LowPassFilter(0.0)

        assert [lpf.filter(s) for s in [4.0, 10.0, -3.0, 99.0]] == [4.0] * 4

    def test_alpha_is_clamped(self):
        """Test that alpha outside [0, 1] is clamped."""
        assert LowPassFilter(1.5).alpha == 1.0
        assert LowPassFilter(-0.5).alpha == 0.0

    def test_reset(self):
        """Test that reset forgets history."""
        lpf = LowPassFilter(0.5)
        lpf.filter(10.0)
        lpf.reset()

        assert lpf.filter(2.0) == 2.0


class TestLowPassFilter2D:
    """Tests for LowPassFilter2D."""

    def test_axes_are_independent(self):
        """Test per-axis filtering."""
        lpf = LowPassFilter2D(0.5)
        lpf.filter(PlanarVector(0.0, 10.0))

        assert lpf.filter(PlanarVector(10.0, 10.0)) == PlanarVector(5.0, 10.0)

    def test_reset_both_axes(self):
        """Test that reset applies to both axes."""
        lpf = LowPassFilter2D.from_cutoff(5.0, 60.0)
        lpf.filter(PlanarVector(1.0, 1.0))
        lpf.reset()

        assert lpf.filter(PlanarVector(50.0, -20.0)) == PlanarVector(50.0, -20.0)


class TestKalmanFilter2D:
    """Tests for KalmanFilter2D."""

    def test_initial_state(self):
        """Test construction state."""
        kf = KalmanFilter2D(PlanarVector(5.0, 6.0))

        assert kf.position == PlanarVector(5.0, 6.0)
        assert kf.velocity == PlanarVector.zero()
        assert kf.position_variance == 1000.0
        assert kf.velocity_variance == 1000.0

    def test_repeated_updates_converge(self):
        """Test convergence to a constant measurement with shrinking variance."""
        kf = KalmanFilter2D(PlanarVector(0.0, 0.0))
        measurement = PlanarVector(10.0, 5.0)

        previous = kf.position_variance
        for _ in range(50):
            kf.update(measurement)
            assert kf.position_variance < previous
            previous = kf.position_variance

        assert kf.position.x == pytest.approx(10.0, abs=1e-3)
        assert kf.position.y == pytest.approx(5.0, abs=1e-3)
        assert kf.position_variance < 0.05

    def test_velocity_is_overwritten(self):
        """Test velocity = gain * innovation rather than a blend."""
        kf = KalmanFilter2D(PlanarVector(0.0, 0.0), measurement_noise=1000.0)
        kf.update(PlanarVector(10.0, 0.0))

        # gain = 1000 / 2000
        assert kf.velocity == PlanarVector(5.0, 0.0)
        assert kf.position == PlanarVector(5.0, 0.0)
        assert kf.position_variance == pytest.approx(500.0)
        assert kf.velocity_variance == pytest.approx(750.0)

        kf.update(PlanarVector(5.0, 0.0))

        # Zero innovation wipes the velocity estimate
        assert kf.velocity == PlanarVector(0.0, 0.0)

    def test_zero_measurement_noise_trusts_measurement(self):
        """Test gain 1 when measurement noise is zero."""
        kf = KalmanFilter2D(PlanarVector(0.0, 0.0), measurement_noise=0.0)
        kf.update(PlanarVector(3.0, 4.0))
        kf.update(PlanarVector(6.0, 8.0))

        assert kf.position == PlanarVector(6.0, 8.0)
        assert kf.velocity == PlanarVector(3.0, 4.0)

    def test_predict(self):
        """Test that predict advances by velocity and inflates variance."""
        kf = KalmanFilter2D(PlanarVector(0.0, 0.0), measurement_noise=0.0)
        kf.update(PlanarVector(10.0, 0.0))
        variance = kf.position_variance

        assert kf.predicted_position(1.0) == PlanarVector(20.0, 0.0)
        assert kf.position == PlanarVector(10.0, 0.0)

        kf.predict(0.5)

        assert kf.position == PlanarVector(15.0, 0.0)
        assert kf.position_variance == pytest.approx(variance + 0.1)

    def test_reset(self):
        """Test reset restores uncertainty and zero velocity."""
        kf = KalmanFilter2D(PlanarVector(0.0, 0.0))
        for _ in range(5):
            kf.update(PlanarVector(4.0, 4.0))
        kf.reset(PlanarVector(1.0, 2.0))

        assert kf.position == PlanarVector(1.0, 2.0)
        assert kf.velocity == PlanarVector.zero()
        assert kf.position_variance == 1000.0
        assert kf.velocity_variance == 1000.0
