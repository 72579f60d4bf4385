"""
Spring-damper attraction.

Second-order model pulling a point towards a target:
    F = -k * (position - target) - c * velocity,  c = 2 * zeta * sqrt(k * m)
integrated with explicit Euler.
"""

import math
from dataclasses import dataclass

from touchmath.core.vector import PlanarVector
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SpringState:
    position: PlanarVector
    velocity: PlanarVector
    target: PlanarVector


class SpringDamperSystem:
    """
    1-mass oscillator.

    damping_ratio < 1 is under-damped, == 1 critical, > 1 over-damped.
    """

    def __init__(
        self,
        spring_constant: float = 10.0,
        damping_ratio: float = 0.7,
        mass: float = 1.0,
    ):
        self.spring_constant = spring_constant
        self.damping_ratio = damping_ratio
        self.mass = mass

        logger.debug(
            f"SpringDamperSystem initialized: k={spring_constant}, "
            f"zeta={damping_ratio}, m={mass}"
        )

    @property
    def damping_coefficient(self) -> float:
        return 2.0 * self.damping_ratio * math.sqrt(self.spring_constant * self.mass)

    def evolve(self, state: SpringState, dt: float) -> SpringState:
        """Advance one explicit Euler step."""
        displacement = state.position - state.target
        force = displacement * (-self.spring_constant) + state.velocity * (
            -self.damping_coefficient
        )
        acceleration = force / self.mass

        velocity = state.velocity + acceleration * dt
        position = state.position + velocity * dt

        return SpringState(position=position, velocity=velocity, target=state.target)

    def settling_time(self) -> float:
        """
        Analytic 2% settling time estimate, 4 / (zeta * sqrt(k / m)).

        Returns:
            Seconds, or infinity for an undamped or slack spring
        """
        rate = self.damping_ratio * math.sqrt(self.spring_constant / self.mass)
        if rate <= 0:
            return math.inf
        return 4.0 / rate

    @staticmethod
    def is_settled(state: SpringState, tolerance: float = 1.0) -> bool:
        """Check if the state is within tolerance of its target."""
        return state.position.distance_to(state.target) <= tolerance
