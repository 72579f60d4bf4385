"""
Unistroke gesture recognition.

Classifies one press-move-release stroke:
1. Fast-path heuristics for taps and near-straight swipes
2. $1-style template matching (resample, normalize, mean point distance)
"""

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from touchmath.core.config import GestureConfig
from touchmath.core.vector import PlanarVector
from touchmath.gestures.bezier import smooth_path
from touchmath.utils.logger import get_logger

logger = get_logger(__name__)

# Largest distance between two points of the normalized [-1, 1] square
MAX_NORMALIZED_DISTANCE = 2.0 * math.sqrt(2.0)


class SwipeDirection(Enum):
    """Swipe direction in math orientation (up = +y)."""

    RIGHT = auto()
    UP = auto()
    LEFT = auto()
    DOWN = auto()

    @classmethod
    def from_vector(cls, vector: PlanarVector) -> "SwipeDirection":
        """
        Quantize a displacement into one of four 90 degree sectors.

        right: [-45, 45), up: [45, 135), left: [135, 225), down: [225, 315)
        """
        angle = vector.angle
        if angle < 0:
            angle += 2.0 * math.pi

        quarter = math.pi / 4.0
        if angle < quarter or angle >= 7.0 * quarter:
            return cls.RIGHT
        if angle < 3.0 * quarter:
            return cls.UP
        if angle < 5.0 * quarter:
            return cls.LEFT
        return cls.DOWN


class GestureKind(Enum):
    TAP = auto()
    DOUBLE_TAP = auto()
    LONG_PRESS = auto()
    SWIPE = auto()
    CUSTOM = auto()


@dataclass(frozen=True)
class Gesture:
    """A recognized gesture."""

    kind: GestureKind
    direction: Optional[SwipeDirection] = None  # SWIPE only
    identifier: Optional[str] = None  # CUSTOM only

    @classmethod
    def swipe(cls, direction: SwipeDirection) -> "Gesture":
        return cls(GestureKind.SWIPE, direction=direction)

    @classmethod
    def custom(cls, identifier: str) -> "Gesture":
        return cls(GestureKind.CUSTOM, identifier=identifier)


TAP = Gesture(GestureKind.TAP)


def normalize_points(points: Sequence[PlanarVector]) -> List[PlanarVector]:
    """
    Center on the bounding box and scale into the [-1, 1] square.

    Uniform scale = max(width, height). A zero scale (all points
    coincident) passes the points through unmodified.
    """
    if not points:
        return []

    array = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    lo = array.min(axis=0)
    hi = array.max(axis=0)
    scale = float(np.max(hi - lo))
    if scale <= 0:
        return list(points)

    center = (lo + hi) / 2.0
    normalized = (array - center) / scale * 2.0
    return [PlanarVector.from_array(row) for row in normalized]


def path_length(points: Sequence[PlanarVector]) -> float:
    """Total polyline length."""
    return sum(points[i].distance_to(points[i - 1]) for i in range(1, len(points)))


def resample(points: Sequence[PlanarVector], count: int) -> Optional[List[PlanarVector]]:
    """
    Resample a path to count points at equal arc-length intervals.

    Args:
        points: Ordered path samples
        count: Number of output points (>= 2)

    Returns:
        Exactly count points, or None if the path has fewer than
        2 points or zero length

    Raises:
        ValueError: If count < 2
    """
    if count < 2:
        raise ValueError("Resample count must be at least 2")

    if len(points) < 2:
        return None

    total = path_length(points)
    if total <= 0:
        return None

    interval = total / (count - 1)
    remaining = list(points)
    resampled = [remaining[0]]
    accumulated = 0.0

    i = 1
    while i < len(remaining) and len(resampled) < count:
        segment = remaining[i].distance_to(remaining[i - 1])

        if accumulated + segment >= interval:
            ratio = (interval - accumulated) / segment
            crossing = remaining[i - 1].lerp(remaining[i], ratio)
            resampled.append(crossing)
            # Continue walking from the emitted point
            remaining[i - 1] = crossing
            accumulated = 0.0
        else:
            accumulated += segment
            i += 1

    # Floating point drift can leave the final point unemitted
    while len(resampled) < count:
        resampled.append(remaining[-1])

    return resampled[:count]


def similarity(points_a: Sequence[PlanarVector], points_b: Sequence[PlanarVector]) -> float:
    """
    Similarity of two equally sized normalized point sets.

    1 - mean(pairwise distance) / (2 * sqrt(2)); 0 for mismatched sizes.
    """
    if len(points_a) != len(points_b) or not points_a:
        return 0.0

    a = np.array([(p.x, p.y) for p in points_a], dtype=np.float64)
    b = np.array([(p.x, p.y) for p in points_b], dtype=np.float64)
    mean_distance = float(np.mean(np.linalg.norm(a - b, axis=1)))
    return 1.0 - mean_distance / MAX_NORMALIZED_DISTANCE


@dataclass(frozen=True)
class GestureTemplate:
    """
    Stored stroke for template matching.

    Points are kept as registered; normalization happens on demand.
    """

    points: Tuple[PlanarVector, ...]
    label: Gesture
    identifier: str = ""

    @property
    def normalized_points(self) -> List[PlanarVector]:
        return normalize_points(self.points)

    def validate(self) -> bool:
        """
        Validate template data.

        Returns:
            True if valid, raises ValueError if invalid
        """
        if len(self.points) < 2:
            raise ValueError("Template needs at least 2 points")

        if path_length(self.points) <= 0:
            raise ValueError("Template path has zero length")

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "identifier": self.identifier,
            "kind": self.label.kind.name,
            "direction": self.label.direction.name if self.label.direction else None,
            "label_identifier": self.label.identifier,
            "points": [[p.x, p.y] for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GestureTemplate":
        """Create from dictionary."""
        direction = data.get("direction")
        label = Gesture(
            kind=GestureKind[data["kind"]],
            direction=SwipeDirection[direction] if direction else None,
            identifier=data.get("label_identifier"),
        )
        return cls(
            points=tuple(PlanarVector(float(x), float(y)) for x, y in data["points"]),
            label=label,
            identifier=data.get("identifier", ""),
        )


class GestureRecognizer:
    """
    Stroke classifier.

    Templates are matched in registration order; on equal scores the
    first registered template wins.
    """

    def __init__(self, config: Optional[GestureConfig] = None):
        """
        Initialize recognizer.

        Args:
            config: Gesture configuration (defaults if omitted)
        """
        self._config = config or GestureConfig()
        self._templates: List[GestureTemplate] = []
        # Resampled + normalized template points, parallel to _templates
        self._prepared: List[Optional[List[PlanarVector]]] = []

        logger.info(
            f"GestureRecognizer initialized: "
            f"samples={self._config.sample_points}, "
            f"threshold={self._config.match_threshold:.2f}"
        )

    @property
    def templates(self) -> Tuple[GestureTemplate, ...]:
        return tuple(self._templates)

    def add_template(self, template: GestureTemplate):
        """Register a template. Zero-length templates never match."""
        self._templates.append(template)
        self._prepared.append(
            resample(template.normalized_points, self._config.sample_points)
        )
        logger.debug(f"Template registered: {template.identifier or template.label.kind.name}")

    def recognize(
        self,
        points: Sequence[PlanarVector],
        threshold: Optional[float] = None,
    ) -> Optional[Gesture]:
        """
        Classify a stroke.

        Args:
            points: Ordered stroke samples
            threshold: Override of the configured match threshold

        Returns:
            Recognized gesture, or None
        """
        if len(points) < 2:
            return None

        # Fast paths count raw samples, so they never see the smoothed stroke
        simple = self._recognize_simple(points)
        if simple is not None:
            return simple

        if self._config.presmooth:
            points = smooth_path(points, self._config.presmooth_steps)

        match = self.best_match(points)
        if match is None:
            return None

        template, score = match
        limit = self._config.match_threshold if threshold is None else threshold
        if score > limit:
            logger.debug(f"Template matched: {template.identifier} score={score:.3f}")
            return template.label

        return None

    def best_match(self, points: Sequence[PlanarVector]) -> Optional[Tuple[GestureTemplate, float]]:
        """
        Highest-scoring template for a stroke, regardless of threshold.

        Returns:
            (template, score), or None for degenerate strokes or no
            positive-scoring template
        """
        candidate = resample(points, self._config.sample_points)
        if candidate is None:
            return None
        candidate = normalize_points(candidate)

        best_score = 0.0
        best_template: Optional[GestureTemplate] = None
        for template, prepared in zip(self._templates, self._prepared):
            if prepared is None:
                continue
            score = similarity(candidate, prepared)
            if score > best_score:
                best_score = score
                best_template = template

        if best_template is None:
            return None
        return best_template, best_score

    def _recognize_simple(self, points: Sequence[PlanarVector]) -> Optional[Gesture]:
        """Tap and swipe heuristics."""
        cfg = self._config
        first, last = points[0], points[-1]
        displacement = first.distance_to(last)

        if displacement < cfg.tap_max_distance and len(points) < cfg.tap_max_samples:
            return TAP

        if (
            displacement > cfg.swipe_min_distance
            and path_length(points) < displacement * cfg.swipe_straightness
        ):
            return Gesture.swipe(SwipeDirection.from_vector(last - first))

        return None
