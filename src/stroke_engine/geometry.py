"""2D point primitives and vector helpers.

Strokes are handled internally as ``(N, 2)`` float64 arrays. ``as_points``
is the single entry point that converts caller data into such an array,
and it always returns a fresh copy so the caller's buffers are never
touched.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from stroke_engine.errors import InvalidInputError


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


def as_points(points: Iterable) -> np.ndarray:
    """Coerce points into an owned ``(N, 2)`` float64 array.

    Accepts a numpy array, ``Point`` objects, anything with ``.x``/``.y``
    attributes, or ``(x, y)`` pairs.
    """
    if isinstance(points, np.ndarray):
        arr = np.array(points, dtype=np.float64, copy=True)
    else:
        rows = []
        for p in points:
            if hasattr(p, "x") and hasattr(p, "y"):
                rows.append((p.x, p.y))
            else:
                rows.append(tuple(p))
        try:
            arr = np.array(rows, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"points must be (x, y) pairs: {e}") from e

    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidInputError(f"expected points of shape (N, 2), got {arr.shape}")
    return arr


def distance(p1, p2) -> float:
    dx = float(p2[0]) - float(p1[0])
    dy = float(p2[1]) - float(p1[1])
    return math.sqrt(dx * dx + dy * dy)


def path_length(points: np.ndarray) -> float:
    """Total length of the polyline through ``points``."""
    if len(points) < 2:
        return 0.0
    return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))


def centroid(points: np.ndarray) -> np.ndarray:
    return points.mean(axis=0)


def bounding_box(points: np.ndarray) -> Rect:
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    return Rect(float(lo[0]), float(lo[1]), float(hi[0] - lo[0]), float(hi[1] - lo[1]))


def rotate_by(points: np.ndarray, radians: float) -> np.ndarray:
    """Rotate points about their centroid. Returns a new array."""
    c = centroid(points)
    cos = math.cos(radians)
    sin = math.sin(radians)
    rel = points - c
    out = np.empty_like(points)
    out[:, 0] = rel[:, 0] * cos - rel[:, 1] * sin + c[0]
    out[:, 1] = rel[:, 0] * sin + rel[:, 1] * cos + c[1]
    return out
