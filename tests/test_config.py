"""
Tests for configuration defaults and validation.
"""

import pytest

from touchmath.core.config import (
    AttractorConfig,
    DynamicsConfig,
    EngineConfig,
    FilterConfig,
    GestureConfig,
    HeatMapConfig,
    KalmanConfig,
    SpaceConfig,
    get_default_config,
)


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        """Test default values."""
        config = get_default_config()

        assert config.spaces.touchpad_width == 250.0
        assert config.spaces.target_height == 824.0
        assert config.filter.cutoff_frequency == 5.0
        assert config.filter.smoothing_factor is None
        assert config.gesture.sample_points == 64
        assert config.gesture.match_threshold == 0.7
        assert config.dynamics.friction == 0.92
        assert config.heatmap.enabled

    def test_log_level_from_environment(self, monkeypatch):
        """Test that the log level is read from TOUCHMATH_LOG_LEVEL."""
        monkeypatch.setenv("TOUCHMATH_LOG_LEVEL", "DEBUG")

        assert EngineConfig().log_level == "DEBUG"

    def test_log_level_default(self, monkeypatch):
        """Test the fallback log level."""
        monkeypatch.delenv("TOUCHMATH_LOG_LEVEL", raising=False)

        assert EngineConfig().log_level == "WARNING"

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"spaces": SpaceConfig(touchpad_width=0)}, "space dimensions"),
            ({"filter": FilterConfig(cutoff_frequency=0)}, "cutoff_frequency"),
            ({"filter": FilterConfig(sample_rate=-1)}, "sample_rate"),
            ({"filter": FilterConfig(smoothing_factor=1.5)}, "smoothing_factor"),
            ({"kalman": KalmanConfig(measurement_noise=-1)}, "noise parameters"),
            ({"kalman": KalmanConfig(initial_uncertainty=0)}, "initial_uncertainty"),
            ({"gesture": GestureConfig(sample_points=1)}, "sample_points"),
            ({"gesture": GestureConfig(match_threshold=1.2)}, "match_threshold"),
            ({"gesture": GestureConfig(presmooth_steps=0)}, "presmooth_steps"),
            ({"dynamics": DynamicsConfig(mass=0)}, "must be positive"),
            ({"dynamics": DynamicsConfig(friction=1.5)}, "friction"),
            ({"dynamics": DynamicsConfig(min_speed=-0.1)}, "min_speed"),
            ({"attractors": AttractorConfig(radius=0)}, "attractor radii"),
            ({"heatmap": HeatMapConfig(resolution=0)}, "resolution"),
        ],
    )
    def test_validation(self, kwargs, message):
        """Test that invalid values are rejected."""
        with pytest.raises(ValueError, match=message):
            EngineConfig(**kwargs)

    def test_zero_measurement_noise_allowed(self):
        """Test that a noiseless sensor is a valid configuration."""
        config = EngineConfig(kalman=KalmanConfig(measurement_noise=0.0))

        assert config.kalman.measurement_noise == 0.0

    def test_log_file_from_environment(self, monkeypatch):
        """Test that the log file path is read from TOUCHMATH_LOG_FILE."""
        monkeypatch.setenv("TOUCHMATH_LOG_FILE", "/tmp/touchmath.log")

        assert EngineConfig().log_file == "/tmp/touchmath.log"

    def test_log_file_default(self, monkeypatch):
        """Test that file logging is off by default."""
        monkeypatch.delenv("TOUCHMATH_LOG_FILE", raising=False)

        assert EngineConfig().log_file is None
