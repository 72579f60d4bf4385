"""
Shared shape of the physical simulators.

A dynamical system is anything that advances an immutable state by a
time step. Spring-damper and momentum both satisfy it structurally.
"""

from typing import Protocol, TypeVar

S = TypeVar("S")


class DynamicalSystem(Protocol[S]):
    """(state, dt) -> state."""

    def evolve(self, state: S, dt: float) -> S:
        ...


def simulate(system: DynamicalSystem[S], state: S, dt: float, steps: int) -> S:
    """Advance state by a fixed number of equal steps."""
    for _ in range(steps):
        state = system.evolve(state, dt)
    return state
