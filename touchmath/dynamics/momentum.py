"""
Frictional momentum for post-release inertia.
"""

from dataclasses import dataclass

from touchmath.core.vector import PlanarVector
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MomentumState:
    velocity: PlanarVector
    friction: float


class MomentumSystem:
    """
    Velocity that accumulates impulses and decays geometrically.

    Once speed drops to min_speed or below the velocity snaps to exactly zero.
    """

    def __init__(self, friction: float = 0.95, min_speed: float = 0.1):
        """
        Initialize momentum system.

        Args:
            friction: Per-tick decay factor, clamped into [0, 1]
            min_speed: Speed below which motion stops
        """
        self._friction = min(1.0, max(0.0, friction))
        self._min_speed = min_speed
        self._velocity = PlanarVector.zero()

        logger.debug(f"MomentumSystem initialized: friction={self._friction:.3f}")

    @property
    def friction(self) -> float:
        return self._friction

    @property
    def velocity(self) -> PlanarVector:
        return self._velocity

    @property
    def state(self) -> MomentumState:
        return MomentumState(self._velocity, self._friction)

    def evolve(self, state: MomentumState, dt: float) -> MomentumState:
        """Apply one tick of friction (dt does not affect decay)."""
        velocity = state.velocity * state.friction
        if velocity.magnitude <= self._min_speed:
            velocity = PlanarVector.zero()
        return MomentumState(velocity, state.friction)

    def add_impulse(self, impulse: PlanarVector):
        self._velocity = self._velocity + impulse

    def update(self, position: PlanarVector, dt: float) -> PlanarVector:
        """
        Advance one tick.

        Returns:
            position + velocity * dt, using the post-friction velocity
        """
        self._velocity = self.evolve(self.state, dt).velocity
        return position + self._velocity * dt

    @property
    def is_moving(self) -> bool:
        return self._velocity.magnitude > self._min_speed

    def reset(self):
        self._velocity = PlanarVector.zero()
