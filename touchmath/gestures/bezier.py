"""
Bezier curves for stroke smoothing.

Evaluation uses an iterative de Casteljau scheme, so the depth of
work is bounded by the number of control points rather than the
call stack.
"""

from typing import List, Sequence

from touchmath.core.vector import PlanarVector


class BezierCurve:
    """Bezier curve of arbitrary degree."""

    def __init__(self, control_points: Sequence[PlanarVector]):
        """
        Initialize curve.

        Args:
            control_points: At least 2 control points

        Raises:
            ValueError: If fewer than 2 control points are given
        """
        if len(control_points) < 2:
            raise ValueError("Need at least 2 control points")
        self._control_points = tuple(control_points)

    @property
    def control_points(self) -> tuple:
        return self._control_points

    @property
    def degree(self) -> int:
        return len(self._control_points) - 1

    def evaluate(self, t: float) -> PlanarVector:
        """Evaluate at parameter t, clamped into [0, 1]."""
        t = min(1.0, max(0.0, t))

        points = list(self._control_points)
        while len(points) > 1:
            points = [points[i].lerp(points[i + 1], t) for i in range(len(points) - 1)]
        return points[0]

    def tangent(self, t: float, delta: float = 1e-3) -> PlanarVector:
        """Unit tangent by central difference (zero vector if degenerate)."""
        return (self.evaluate(t + delta) - self.evaluate(t - delta)).normalized()

    def sample(self, count: int) -> List[PlanarVector]:
        """Sample count points at uniform parameter spacing."""
        if count <= 1:
            return [self.evaluate(0.5)]
        return [self.evaluate(i / (count - 1)) for i in range(count)]

    def arc_length(self, samples: int = 100) -> float:
        """Approximate arc length by a sampled polyline."""
        points = self.sample(max(2, samples))
        return sum(points[i].distance_to(points[i - 1]) for i in range(1, len(points)))


def quadratic(start: PlanarVector, control: PlanarVector, end: PlanarVector) -> BezierCurve:
    return BezierCurve([start, control, end])


def cubic(
    start: PlanarVector,
    control1: PlanarVector,
    control2: PlanarVector,
    end: PlanarVector,
) -> BezierCurve:
    return BezierCurve([start, control1, control2, end])


def smooth_path(points: Sequence[PlanarVector], steps: int = 4) -> List[PlanarVector]:
    """
    Smooth a polyline with quadratic Bezier arcs.

    Each interior sample becomes the control point of an arc running
    from the midpoint of its incoming segment to the midpoint of its
    outgoing segment. Endpoints are preserved.

    Args:
        points: Stroke samples
        steps: Samples per arc (>= 1)

    Returns:
        Smoothed stroke; paths with fewer than 3 points are returned as-is
    """
    if len(points) < 3:
        return list(points)

    steps = max(1, steps)
    smoothed = [points[0]]
    for i in range(1, len(points) - 1):
        start = points[i - 1].lerp(points[i], 0.5)
        end = points[i].lerp(points[i + 1], 0.5)
        arc = quadratic(start, points[i], end)
        smoothed.extend(arc.evaluate(k / steps) for k in range(steps + 1))
    smoothed.append(points[-1])
    return smoothed
