"""
Configuration management for touchmath.

All engine configuration with sensible defaults.
Uses dataclasses for type safety and validation.
"""

from dataclasses import dataclass, field
from typing import Optional
import os


@dataclass
class SpaceConfig:
    """Touchpad and target-screen dimensions."""

    touchpad_width: float = 250.0
    touchpad_height: float = 180.0
    target_width: float = 372.0
    target_height: float = 824.0


@dataclass
class FilterConfig:
    """Low-pass input filter configuration."""

    cutoff_frequency: float = 5.0  # Hz
    sample_rate: float = 60.0  # Hz, expected touch sample rate

    # Explicit smoothing factor; overrides the cutoff derivation when set
    smoothing_factor: Optional[float] = None


@dataclass
class KalmanConfig:
    """Simplified Kalman estimator configuration."""

    process_noise_position: float = 0.1
    process_noise_velocity: float = 0.01
    measurement_noise: float = 1.0

    # Variance assigned on reset (models total initial uncertainty)
    initial_uncertainty: float = 1000.0


@dataclass
class GestureConfig:
    """Gesture recognition configuration."""

    sample_points: int = 64  # Resample count for template matching
    match_threshold: float = 0.7  # Minimum similarity to accept a template

    # Tap fast path
    tap_max_distance: float = 10.0
    tap_max_samples: int = 10

    # Swipe fast path
    swipe_min_distance: float = 50.0
    swipe_straightness: float = 1.5  # path_length < straightness * displacement

    # Cursor displacement applied for a recognized swipe (target units)
    swipe_distance: float = 100.0

    # Bezier pre-smoothing of the stroke before classification
    presmooth: bool = False
    presmooth_steps: int = 4


@dataclass
class DynamicsConfig:
    """Physical simulation constants."""

    spring_constant: float = 15.0
    damping_ratio: float = 0.8
    mass: float = 1.0

    friction: float = 0.92  # Momentum decay per tick
    min_speed: float = 0.1  # Below this momentum snaps to rest
    impulse_scale: float = 0.1  # Drag delta -> momentum impulse

    # Spring stops driving once this close to its attractor
    settle_distance: float = 1.0


@dataclass
class AttractorConfig:
    """Attractor field defaults used by set_attractors."""

    strength: float = 50.0
    radius: float = 30.0
    capture_radius: float = 5.0
    epsilon: float = 0.01
    force_scale: float = 0.1  # Field force -> cursor displacement


@dataclass
class HeatMapConfig:
    """Diagnostic touch heat-map configuration."""

    enabled: bool = True
    resolution: int = 50


@dataclass
class EngineConfig:
    """Main engine configuration."""

    spaces: SpaceConfig = field(default_factory=SpaceConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    kalman: KalmanConfig = field(default_factory=KalmanConfig)
    gesture: GestureConfig = field(default_factory=GestureConfig)
    dynamics: DynamicsConfig = field(default_factory=DynamicsConfig)
    attractors: AttractorConfig = field(default_factory=AttractorConfig)
    heatmap: HeatMapConfig = field(default_factory=HeatMapConfig)

    version: str = "0.1.0"

    # Log level from environment or default to WARNING
    log_level: str = field(
        default_factory=lambda: os.getenv("TOUCHMATH_LOG_LEVEL", "WARNING")
    )

    # Optional log file path from environment
    log_file: Optional[str] = field(
        default_factory=lambda: os.getenv("TOUCHMATH_LOG_FILE")
    )

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration parameters."""
        spaces = self.spaces
        if min(
            spaces.touchpad_width,
            spaces.touchpad_height,
            spaces.target_width,
            spaces.target_height,
        ) <= 0:
            raise ValueError("space dimensions must be positive")

        # Filter config validation
        if self.filter.cutoff_frequency <= 0:
            raise ValueError("cutoff_frequency must be positive")

        if self.filter.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")

        if self.filter.smoothing_factor is not None and not (
            0.0 <= self.filter.smoothing_factor <= 1.0
        ):
            raise ValueError("smoothing_factor must be between 0.0 and 1.0")

        # Kalman config validation
        kalman = self.kalman
        if min(
            kalman.process_noise_position,
            kalman.process_noise_velocity,
            kalman.measurement_noise,
        ) < 0:
            raise ValueError("Kalman noise parameters must be non-negative")

        if kalman.initial_uncertainty <= 0:
            raise ValueError("initial_uncertainty must be positive")

        # Gesture config validation
        if self.gesture.sample_points < 2:
            raise ValueError("sample_points must be at least 2")

        if not 0.0 <= self.gesture.match_threshold <= 1.0:
            raise ValueError("match_threshold must be between 0.0 and 1.0")

        if self.gesture.presmooth_steps < 1:
            raise ValueError("presmooth_steps must be at least 1")

        # Dynamics config validation
        dyn = self.dynamics
        if dyn.spring_constant <= 0 or dyn.damping_ratio <= 0 or dyn.mass <= 0:
            raise ValueError("spring_constant, damping_ratio and mass must be positive")

        if not 0.0 <= dyn.friction <= 1.0:
            raise ValueError("friction must be between 0.0 and 1.0")

        if dyn.min_speed < 0:
            raise ValueError("min_speed must be non-negative")

        # Attractor config validation
        if self.attractors.radius <= 0 or self.attractors.capture_radius <= 0:
            raise ValueError("attractor radii must be positive")

        if self.heatmap.resolution < 1:
            raise ValueError("heatmap resolution must be at least 1")


def get_default_config() -> EngineConfig:
    """
    Get default engine configuration.

    Returns:
        EngineConfig instance with default values
    """
    return EngineConfig()
