"""
touchmath - scripted replay

Main entry point. Drives the engine with a short synthetic session
(drag, swipe, tap, inertial ticks, attractor snap) and logs every
CursorUpdate it emits.

Usage:
    python -m touchmath.main
"""

import sys
from typing import List, Optional, Tuple

from touchmath.core.config import EngineConfig, get_default_config
from touchmath.core.engine import CursorUpdate, TouchPhase, TouchpadEngine
from touchmath.core.vector import PlanarVector
from touchmath.utils.logger import get_logger, setup_logger

# Physics tick length (60 Hz)
TICK = 1.0 / 60.0

Sample = Tuple[float, float, TouchPhase]


def _stroke(start: Tuple[float, float], end: Tuple[float, float], steps: int) -> List[Sample]:
    """Straight press-move-release stroke."""
    samples: List[Sample] = []
    for i in range(steps + 1):
        t = i / steps
        x = start[0] + (end[0] - start[0]) * t
        y = start[1] + (end[1] - start[1]) * t
        if i == 0:
            phase = TouchPhase.BEGAN
        elif i == steps:
            phase = TouchPhase.ENDED
        else:
            phase = TouchPhase.MOVED
        samples.append((x, y, phase))
    return samples


def run_session(engine: TouchpadEngine, ticks: int = 120) -> List[CursorUpdate]:
    """
    Replay the demo session.

    Args:
        engine: Engine to drive
        ticks: Physics ticks after each stroke

    Returns:
        All emitted updates in order
    """
    strokes = [
        _stroke((125.0, 90.0), (160.0, 100.0), 12),  # slow drag
        _stroke((20.0, 90.0), (240.0, 90.0), 12),  # swipe right
        _stroke((125.0, 90.0), (126.0, 90.0), 1),  # tap
    ]

    updates: List[CursorUpdate] = []
    for stroke in strokes:
        for x, y, phase in stroke:
            update = engine.process_touch(PlanarVector(x, y), phase)
            if update is not None:
                updates.append(update)
        for _ in range(ticks):
            update = engine.update_physics(TICK)
            if update is None:
                break
            updates.append(update)

    center = engine.target_bounds.center
    engine.set_attractors([PlanarVector(center.x + 20.0, center.y - 20.0)])
    for _ in range(ticks):
        update = engine.update_physics(TICK)
        if update is None:
            break
        updates.append(update)

    return updates


def main(config: Optional[EngineConfig] = None) -> int:
    """Main entry point."""

    config = config or get_default_config()

    setup_logger(name="touchmath", level=config.log_level, log_file=config.log_file)

    logger = get_logger(__name__)
    logger.info("=" * 60)
    logger.info("touchmath replay starting")
    logger.info(f"Version: {config.version}")
    logger.info("=" * 60)

    engine = TouchpadEngine(config)
    updates = run_session(engine)

    for update in updates:
        direction = f" {update.direction.name}" if update.direction else ""
        logger.info(
            f"{update.kind.name}{direction} -> "
            f"({update.position.x:.2f}, {update.position.y:.2f})"
        )

    logger.info(f"Replay finished: {len(updates)} updates")
    return 0


if __name__ == "__main__":
    sys.exit(main())
