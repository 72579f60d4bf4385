"""
Tests for the heat map and bivariate Gaussian.
"""

import math

import numpy as np
import pytest

from touchmath.core.bounds import RectBounds
from touchmath.core.vector import PlanarVector
from touchmath.measure.distribution import Gaussian2D
from touchmath.measure.heatmap import TouchHeatMap


class TestTouchHeatMap:
    """Tests for TouchHeatMap."""

    @pytest.fixture
    def heat_map(self):
        return TouchHeatMap(RectBounds.from_size(100, 100), resolution=10)

    def test_counts_and_probability(self, heat_map):
        """Test per-cell counts and their share of the total."""
        heat_map.record_touch(PlanarVector(5, 5))
        heat_map.record_touch(PlanarVector(6, 8))
        heat_map.record_touch(PlanarVector(95, 95))

        assert heat_map.total_touches == 3
        assert heat_map.probability(PlanarVector(1, 1)) == pytest.approx(2 / 3)
        assert heat_map.probability(PlanarVector(50, 50)) == 0.0
        assert heat_map.counts[0, 0] == 2

    def test_grid_orientation(self, heat_map):
        """Test that rows follow y and columns follow x."""
        heat_map.record_touch(PlanarVector(95, 5))

        assert heat_map.counts[0, 9] == 1

    def test_outside_points_ignored(self, heat_map):
        """Test that touches outside the bounds are dropped."""
        heat_map.record_touch(PlanarVector(150, 5))
        heat_map.record_touch(PlanarVector(-1, 5))

        assert heat_map.total_touches == 0
        assert heat_map.probability(PlanarVector(150, 5)) == 0.0

    def test_far_edge_lands_in_last_cell(self, heat_map):
        """Test that the inclusive max edge maps into the grid."""
        heat_map.record_touch(PlanarVector(100, 100))

        assert heat_map.counts[9, 9] == 1

    def test_mode(self, heat_map):
        """Test that the mode is the center of the busiest cell."""
        assert heat_map.mode() is None

        heat_map.record_touch(PlanarVector(31, 72))
        heat_map.record_touch(PlanarVector(33, 78))
        heat_map.record_touch(PlanarVector(90, 10))

        assert heat_map.mode() == PlanarVector(35.0, 75.0)

    def test_reset(self, heat_map):
        """Test that reset clears all counts."""
        heat_map.record_touch(PlanarVector(5, 5))

        heat_map.reset()

        assert heat_map.total_touches == 0
        assert heat_map.counts.shape == (10, 10)


class TestGaussian2D:
    """Tests for Gaussian2D."""

    def test_density_at_mean(self):
        """Test peak density 1 / (2 pi sx sy) for uncorrelated axes."""
        dist = Gaussian2D(PlanarVector(10, 20), PlanarVector(2, 3))

        assert dist.probability(PlanarVector(10, 20)) == pytest.approx(1.0 / (2.0 * math.pi * 6.0))

    def test_density_decreases_away_from_mean(self):
        """Test that density falls off with distance."""
        dist = Gaussian2D(PlanarVector(0, 0), PlanarVector(1, 1))

        assert dist.probability(PlanarVector(1, 0)) < dist.probability(PlanarVector(0, 0))

    def test_covariance(self):
        """Test covariance matrix construction."""
        dist = Gaussian2D(PlanarVector(0, 0), PlanarVector(2, 3), correlation=0.5)

        np.testing.assert_allclose(dist.covariance, [[4.0, 3.0], [3.0, 9.0]])
        assert dist.determinant == pytest.approx(27.0)

    def test_singular_density_is_zero(self):
        """Test that a degenerate distribution has no density."""
        dist = Gaussian2D(PlanarVector(0, 0), PlanarVector(0, 1))

        assert dist.probability(PlanarVector(0, 0)) == 0.0

    def test_seeded_sample_is_reproducible(self):
        """Test that equal seeds give equal draws."""
        dist = Gaussian2D(PlanarVector(5, 5), PlanarVector(1, 2), correlation=-0.3)

        first = dist.sample(np.random.default_rng(42))
        second = dist.sample(np.random.default_rng(42))

        assert first == second

    def test_zero_covariance_sample_is_mean(self):
        """Test that a point mass always samples its mean."""
        dist = Gaussian2D(PlanarVector(3, 4), PlanarVector(0, 0))

        draw = dist.sample(np.random.default_rng(0))

        assert draw.x == pytest.approx(3.0)
        assert draw.y == pytest.approx(4.0)

    def test_expected_value(self):
        """Test that the expectation is the mean."""
        assert Gaussian2D(PlanarVector(1, 2), PlanarVector(1, 1)).expected_value() == PlanarVector(1, 2)
