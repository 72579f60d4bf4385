"""
Engine orchestrating the touch-to-cursor pipeline.

Owns every component and the virtual cursor, and exposes one
input-driven and one time-driven entry point.
"""

import math
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence

from touchmath.core.bounds import RectBounds
from touchmath.core.config import EngineConfig
from touchmath.core.state import (
    InteractionState,
    MachineOutput,
    OutputKind,
    TouchInput,
    TouchpadStateMachine,
)
from touchmath.core.transform import CoordinateSpace, CoordinateTransform
from touchmath.core.vector import PlanarVector
from touchmath.dynamics.attractors import AttractorField
from touchmath.dynamics.momentum import MomentumSystem
from touchmath.dynamics.spring import SpringDamperSystem, SpringState
from touchmath.filters.kalman import KalmanFilter2D
from touchmath.filters.smoothing import LowPassFilter2D
from touchmath.gestures.recognizer import (
    Gesture,
    GestureKind,
    GestureRecognizer,
    GestureTemplate,
    SwipeDirection,
)
from touchmath.measure.heatmap import TouchHeatMap
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)


class TouchPhase(Enum):
    BEGAN = auto()
    MOVED = auto()
    ENDED = auto()


class CursorUpdateKind(Enum):
    MOVED = auto()
    CLICKED = auto()
    DOUBLE_CLICKED = auto()
    LONG_PRESSED = auto()
    HOLD_STARTED = auto()
    SWIPED = auto()
    RESET = auto()


@dataclass(frozen=True)
class CursorUpdate:
    """Result of one input sample or physics tick."""

    kind: CursorUpdateKind
    position: PlanarVector  # Target-space cursor position
    timestamp: float = field(default_factory=time.monotonic)
    direction: Optional[SwipeDirection] = None  # SWIPED only


# Cursor displacement direction for a recognized swipe
_SWIPE_VECTORS = {
    SwipeDirection.UP: PlanarVector(0.0, -1.0),
    SwipeDirection.DOWN: PlanarVector(0.0, 1.0),
    SwipeDirection.LEFT: PlanarVector(-1.0, 0.0),
    SwipeDirection.RIGHT: PlanarVector(1.0, 0.0),
}

_GESTURE_UPDATES = {
    GestureKind.TAP: CursorUpdateKind.CLICKED,
    GestureKind.DOUBLE_TAP: CursorUpdateKind.DOUBLE_CLICKED,
    GestureKind.LONG_PRESS: CursorUpdateKind.LONG_PRESSED,
}


def circle_template(points: int = 32) -> GestureTemplate:
    """Unit circle stroke, counter-clockwise from (1, 0)."""
    stroke = tuple(
        PlanarVector(math.cos(2.0 * math.pi * i / points), math.sin(2.0 * math.pi * i / points))
        for i in range(points)
    )
    return GestureTemplate(points=stroke, label=Gesture.custom("circle"), identifier="circle")


class TouchpadEngine:
    """
    Touch-to-cursor engine.

    Pipeline per sample:
    heat map -> low-pass -> Kalman -> state machine -> (gesture on release)
    -> coordinate transform -> attractor field -> clamp

    Not reentrant: callers on several threads must serialize access.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        touchpad_bounds: Optional[RectBounds] = None,
        target_bounds: Optional[RectBounds] = None,
    ):
        """
        Initialize engine.

        Args:
            config: Engine configuration (defaults if omitted)
            touchpad_bounds: Input space, overrides config.spaces
            target_bounds: Output space, overrides config.spaces
        """
        self._config = config or EngineConfig()
        spaces = self._config.spaces

        self._touchpad_bounds = touchpad_bounds or RectBounds.from_size(
            spaces.touchpad_width, spaces.touchpad_height
        )
        self._target_bounds = target_bounds or RectBounds.from_size(
            spaces.target_width, spaces.target_height
        )

        self._transform = CoordinateTransform(
            CoordinateSpace(self._touchpad_bounds, "touchpad"),
            CoordinateSpace(self._target_bounds, "target"),
        )

        self._state_machine = TouchpadStateMachine()

        filter_cfg = self._config.filter
        if filter_cfg.smoothing_factor is not None:
            self._low_pass = LowPassFilter2D(filter_cfg.smoothing_factor)
        else:
            self._low_pass = LowPassFilter2D.from_cutoff(
                filter_cfg.cutoff_frequency, filter_cfg.sample_rate
            )

        kalman_cfg = self._config.kalman
        self._kalman = KalmanFilter2D(
            initial_position=self._touchpad_bounds.center,
            process_noise=(kalman_cfg.process_noise_position, kalman_cfg.process_noise_velocity),
            measurement_noise=kalman_cfg.measurement_noise,
            initial_uncertainty=kalman_cfg.initial_uncertainty,
        )

        dyn = self._config.dynamics
        self._spring = SpringDamperSystem(dyn.spring_constant, dyn.damping_ratio, dyn.mass)
        self._momentum = MomentumSystem(dyn.friction, dyn.min_speed)
        self._spring_velocity = PlanarVector.zero()

        self._recognizer = GestureRecognizer(self._config.gesture)
        self._recognizer.add_template(circle_template())

        self._heat_map: Optional[TouchHeatMap] = None
        if self._config.heatmap.enabled:
            self._heat_map = TouchHeatMap(self._touchpad_bounds, self._config.heatmap.resolution)

        self._attractor_field: Optional[AttractorField] = None

        self._touch_position = self._touchpad_bounds.center
        self._cursor_position = self._target_bounds.center
        self._gesture_points: List[PlanarVector] = []

        logger.info(
            f"TouchpadEngine initialized: touchpad={self._touchpad_bounds.width:g}x"
            f"{self._touchpad_bounds.height:g}, target={self._target_bounds.width:g}x"
            f"{self._target_bounds.height:g}, alpha={self._low_pass.alpha:.3f}"
        )

    # ------------------------------------------------------------------
    # Input-driven pipeline
    # ------------------------------------------------------------------

    def process_touch(
        self,
        point: PlanarVector,
        phase: TouchPhase,
        timestamp: Optional[float] = None,
    ) -> Optional[CursorUpdate]:
        """
        Process one raw touch sample.

        Args:
            point: Raw touchpad-space position
            phase: Touch phase of the sample
            timestamp: Host timestamp for the emitted update (monotonic
                clock when omitted)

        Returns:
            CursorUpdate, or None if the sample produced no output
        """
        if self._heat_map is not None:
            self._heat_map.record_touch(point)

        filtered = self._low_pass.filter(point)
        self._kalman.update(filtered)
        estimate = self._kalman.position
        self._touch_position = estimate

        if phase == TouchPhase.BEGAN:
            touch = TouchInput.press_started(estimate)
        elif phase == TouchPhase.MOVED:
            touch = TouchInput.press_moved(estimate)
        else:
            touch = TouchInput.press_ended(estimate)

        output = self._state_machine.process(touch)
        if output is None:
            # Ignored input never extends or completes a stroke
            return None

        if phase == TouchPhase.BEGAN:
            self._gesture_points = [estimate]
        else:
            self._gesture_points.append(estimate)

        if phase == TouchPhase.ENDED:
            points, self._gesture_points = self._gesture_points, []
            gesture = self._recognizer.recognize(points)
            if gesture is not None:
                update = self._handle_gesture(gesture, timestamp)
                if update is not None:
                    logger.debug(f"Gesture recognized: {gesture.kind.name}")
                    if output.kind == OutputKind.RESET:
                        # Drag completed: the cursor stays where the gesture put it
                        self._reset_motion()
                    return update

        return self._handle_output(output, timestamp)

    def _handle_output(self, output: MachineOutput, timestamp: Optional[float]) -> CursorUpdate:
        """Turn a state machine output into a cursor update."""
        if output.kind == OutputKind.START_HOLD:
            return self._update(CursorUpdateKind.HOLD_STARTED, timestamp)

        if output.kind == OutputKind.MOVE_CURSOR:
            delta = output.vector
            self._momentum.add_impulse(delta * self._config.dynamics.impulse_scale)

            moved = self._cursor_position + self._transform.transform_vector(delta)
            if self._attractor_field is not None:
                force = self._attractor_field.force(moved)
                moved = moved + force * self._config.attractors.force_scale

            self._cursor_position = self._target_bounds.clamp(moved)
            self._spring_velocity = PlanarVector.zero()
            return self._update(CursorUpdateKind.MOVED, timestamp)

        if output.kind == OutputKind.PERFORM_CLICK:
            position = self._target_bounds.clamp(self._transform.transform(output.vector))
            return CursorUpdate(CursorUpdateKind.CLICKED, position, self._now(timestamp))

        self.reset_to_center()
        return self._update(CursorUpdateKind.RESET, timestamp)

    def _handle_gesture(self, gesture: Gesture, timestamp: Optional[float]) -> Optional[CursorUpdate]:
        """Map a recognized gesture to an update; None for template-only labels."""
        if gesture.kind == GestureKind.SWIPE and gesture.direction is not None:
            step = _SWIPE_VECTORS[gesture.direction] * self._config.gesture.swipe_distance
            self._cursor_position = self._target_bounds.clamp(self._cursor_position + step)
            return CursorUpdate(
                CursorUpdateKind.SWIPED,
                self._cursor_position,
                self._now(timestamp),
                direction=gesture.direction,
            )

        kind = _GESTURE_UPDATES.get(gesture.kind)
        if kind is None:
            return None
        return self._update(kind, timestamp)

    # ------------------------------------------------------------------
    # Time-driven pipeline
    # ------------------------------------------------------------------

    def update_physics(self, dt: float, timestamp: Optional[float] = None) -> Optional[CursorUpdate]:
        """
        Advance momentum or spring attraction by one tick.

        Momentum takes precedence; the spring only runs when momentum
        is at rest and the cursor is farther than settle_distance from
        its nearest attractor.

        Args:
            dt: Tick length in seconds

        Returns:
            MOVED update, or None when nothing is in motion
        """
        if self._momentum.is_moving:
            moved = self._momentum.update(self._cursor_position, dt)
            self._cursor_position = self._target_bounds.clamp(moved)
            return self._update(CursorUpdateKind.MOVED, timestamp)

        if self._attractor_field is None:
            return None

        target = self._attractor_field.nearest(self._cursor_position)
        if target is None:
            return None

        if self._cursor_position.distance_to(target) <= self._config.dynamics.settle_distance:
            self._spring_velocity = PlanarVector.zero()
            return None

        state = self._spring.evolve(
            SpringState(self._cursor_position, self._spring_velocity, target), dt
        )
        self._cursor_position = self._target_bounds.clamp(state.position)
        self._spring_velocity = state.velocity
        return self._update(CursorUpdateKind.MOVED, timestamp)

    # ------------------------------------------------------------------
    # Configuration and utilities
    # ------------------------------------------------------------------

    def reset_to_center(self):
        """Recenter both positions and reset filters, momentum and context."""
        self._cursor_position = self._target_bounds.center
        self._state_machine.reset()
        self._reset_motion()
        logger.debug("Engine reset to center")

    def _reset_motion(self):
        """Drop filter history, momentum and stroke context; the cursor is kept."""
        self._touch_position = self._touchpad_bounds.center
        self._kalman.reset(self._touch_position)
        self._low_pass.reset()
        self._momentum.reset()
        self._spring_velocity = PlanarVector.zero()
        self._gesture_points = []

    def set_attractors(
        self,
        points: Sequence[PlanarVector],
        strength: Optional[float] = None,
        radius: Optional[float] = None,
    ):
        """Replace the attractor field wholesale."""
        cfg = self._config.attractors
        self._attractor_field = AttractorField.from_points(
            points,
            strength=cfg.strength if strength is None else strength,
            radius=cfg.radius if radius is None else radius,
            capture_radius=cfg.capture_radius,
            epsilon=cfg.epsilon,
        )
        self._spring_velocity = PlanarVector.zero()
        logger.debug(f"Attractor field set: {len(points)} attractors")

    def clear_attractors(self):
        self._attractor_field = None
        self._spring_velocity = PlanarVector.zero()

    def add_template(self, template: GestureTemplate):
        self._recognizer.add_template(template)

    def _now(self, timestamp: Optional[float]) -> float:
        return time.monotonic() if timestamp is None else timestamp

    def _update(self, kind: CursorUpdateKind, timestamp: Optional[float]) -> CursorUpdate:
        return CursorUpdate(kind, self._cursor_position, self._now(timestamp))

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def cursor_position(self) -> PlanarVector:
        return self._cursor_position

    @property
    def touch_position(self) -> PlanarVector:
        """Last filtered touchpad-space estimate."""
        return self._touch_position

    @property
    def state(self) -> InteractionState:
        return self._state_machine.current_state

    @property
    def transform(self) -> CoordinateTransform:
        return self._transform

    @property
    def touchpad_bounds(self) -> RectBounds:
        return self._touchpad_bounds

    @property
    def target_bounds(self) -> RectBounds:
        return self._target_bounds

    @property
    def attractor_field(self) -> Optional[AttractorField]:
        return self._attractor_field

    @property
    def heat_map(self) -> Optional[TouchHeatMap]:
        return self._heat_map

    @property
    def recognizer(self) -> GestureRecognizer:
        return self._recognizer

    @property
    def momentum(self) -> MomentumSystem:
        return self._momentum

    @property
    def kalman(self) -> KalmanFilter2D:
        return self._kalman
