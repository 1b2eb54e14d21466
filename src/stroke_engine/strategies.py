"""Distance strategies for comparing a candidate with a template.

Two interchangeable variants ship with the engine:

- ``GoldenSectionStrategy`` ("accurate"): golden-section search over the
  rotation angle for the smallest mean point-to-point distance.
- ``ProtractorStrategy`` ("fast"): closed-form optimal angle between the
  two unit vectors, then the angular distance at that angle.

Additional metrics can be added with ``register_strategy`` without
touching the recognizer.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

import numpy as np

from stroke_engine.config import RecognizerConfig
from stroke_engine.geometry import rotate_by
from stroke_engine.pipeline import NormalizedStroke
from stroke_engine.templates import Template

PHI = 0.5 * (-1.0 + math.sqrt(5.0))  # golden ratio conjugate


class Strategy(Enum):
    ACCURATE = "accurate"
    FAST = "fast"


class DistanceStrategy(ABC):
    """Scores a normalized candidate against one template."""

    name: str = ""

    @abstractmethod
    def distance(
        self, candidate: NormalizedStroke, template: Template, config: RecognizerConfig
    ) -> float:
        """Lower is better."""

    @abstractmethod
    def score(self, distance: float, config: RecognizerConfig) -> float:
        """Map a distance onto a confidence, 1.0 being a perfect match."""


def path_distance(pts1: np.ndarray, pts2: np.ndarray) -> float:
    """Mean Euclidean distance between corresponding points."""
    return float(np.mean(np.linalg.norm(pts1 - pts2, axis=1)))


def distance_at_angle(points: np.ndarray, template_points: np.ndarray, radians: float) -> float:
    return path_distance(rotate_by(points, radians), template_points)


def distance_at_best_angle(
    points: np.ndarray,
    template_points: np.ndarray,
    a: float,
    b: float,
    threshold: float,
) -> float:
    """Golden-section search for the rotation in [a, b] minimizing path distance.

    Each step keeps one of the two interior probes, so only one new
    evaluation is needed per iteration.
    """
    x1 = PHI * a + (1.0 - PHI) * b
    f1 = distance_at_angle(points, template_points, x1)
    x2 = (1.0 - PHI) * a + PHI * b
    f2 = distance_at_angle(points, template_points, x2)

    while abs(b - a) > threshold:
        if f1 < f2:
            b = x2
            x2, f2 = x1, f1
            x1 = PHI * a + (1.0 - PHI) * b
            f1 = distance_at_angle(points, template_points, x1)
        else:
            a = x1
            x1, f1 = x2, f2
            x2 = (1.0 - PHI) * a + PHI * b
            f2 = distance_at_angle(points, template_points, x2)

    return min(f1, f2)


def optimal_cosine_distance(v1: np.ndarray, v2: np.ndarray) -> float:
    """Protractor: angular distance between two unit vectors at their best rotation."""
    x1, y1 = v1[0::2], v1[1::2]
    x2, y2 = v2[0::2], v2[1::2]
    a = float(np.dot(x1, x2) + np.dot(y1, y2))
    b = float(np.dot(x1, y2) - np.dot(y1, x2))

    if a == 0.0:
        angle = math.copysign(math.pi / 2.0, b)
    else:
        angle = math.atan(b / a)
    cos_sim = a * math.cos(angle) + b * math.sin(angle)
    return math.acos(float(np.clip(cos_sim, -1.0, 1.0)))


class GoldenSectionStrategy(DistanceStrategy):
    """Accurate strategy. Angle bounds default to the recognizer config."""

    name = Strategy.ACCURATE.value

    def __init__(
        self,
        angle_range_deg: Optional[float] = None,
        angle_precision_deg: Optional[float] = None,
    ):
        self.angle_range_deg = angle_range_deg
        self.angle_precision_deg = angle_precision_deg

    def distance(self, candidate, template, config):
        angle_range = (
            math.radians(self.angle_range_deg)
            if self.angle_range_deg is not None
            else config.angle_range
        )
        precision = (
            math.radians(self.angle_precision_deg)
            if self.angle_precision_deg is not None
            else config.angle_precision
        )
        return distance_at_best_angle(
            candidate.points, template.points, -angle_range, angle_range, precision
        )

    def score(self, distance, config):
        return max(0.0, 1.0 - distance / config.half_diagonal)


class ProtractorStrategy(DistanceStrategy):
    """Fast strategy, one O(N) pass per template."""

    name = Strategy.FAST.value

    def distance(self, candidate, template, config):
        return optimal_cosine_distance(template.vector, candidate.vector)

    def score(self, distance, config):
        return max(0.0, 1.0 - distance)


_STRATEGIES: dict[str, DistanceStrategy] = {
    Strategy.ACCURATE.value: GoldenSectionStrategy(),
    Strategy.FAST.value: ProtractorStrategy(),
}

_ALIASES = {
    "golden_section": Strategy.ACCURATE.value,
    "protractor": Strategy.FAST.value,
}


def register_strategy(name: str, strategy: DistanceStrategy):
    """Make a custom strategy selectable by name."""
    _STRATEGIES[name] = strategy


def get_strategy(value: Union[Strategy, str, DistanceStrategy]) -> DistanceStrategy:
    """Resolve a strategy given as enum member, name, or instance."""
    if isinstance(value, DistanceStrategy):
        return value
    key = value.value if isinstance(value, Strategy) else str(value).lower()
    key = _ALIASES.get(key, key)
    try:
        return _STRATEGIES[key]
    except KeyError:
        raise ValueError(
            f"Unknown strategy '{value}'. Available: {sorted(_STRATEGIES)}"
        ) from None
