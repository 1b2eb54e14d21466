"""Normalization pipeline for unistrokes.

Turns an arbitrary stroke into a canonical form that can be compared
point-by-point with another stroke:

    resample -> rotate to indicative angle 0 -> scale to reference square
    -> translate centroid to origin -> (unit vector for Protractor)

Scaling is deliberately non-uniform (x and y are stretched independently
to fill the square). Score thresholds used by callers are tuned against
this, so do not switch it to uniform scaling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from stroke_engine.config import RecognizerConfig
from stroke_engine.errors import InvalidInputError
from stroke_engine.geometry import (
    as_points,
    bounding_box,
    centroid,
    distance,
    path_length,
    rotate_by,
)

_EPS = 1e-8


@dataclass(frozen=True)
class NormalizedStroke:
    """Output of the pipeline: ``points`` is (num_points, 2), ``vector`` is (2 * num_points,)."""
    points: np.ndarray
    vector: np.ndarray


def validate_stroke(points: np.ndarray) -> float:
    """Check that a stroke can be normalized. Returns its path length."""
    if len(points) < 2:
        raise InvalidInputError(f"stroke needs at least 2 points, got {len(points)}")
    if not np.all(np.isfinite(points)):
        raise InvalidInputError("stroke contains non-finite coordinates")
    length = path_length(points)
    if length < _EPS:
        raise InvalidInputError("stroke has zero path length")
    return length


def resample(points: np.ndarray, n: int) -> np.ndarray:
    """Resample a stroke into ``n`` points spaced equally along its path.

    Walks the polyline and emits an interpolated point each time the
    accumulated distance reaches the interval length. The interpolated
    point is spliced into a private working list so the walk continues
    from it; the input array is never modified.
    """
    interval = validate_stroke(points) / (n - 1)
    work = [(float(x), float(y)) for x, y in points]
    out = [work[0]]
    acc = 0.0

    i = 1
    while i < len(work):
        prev, cur = work[i - 1], work[i]
        d = distance(prev, cur)
        if d > 0 and acc + d >= interval:
            t = (interval - acc) / d
            q = (prev[0] + t * (cur[0] - prev[0]), prev[1] + t * (cur[1] - prev[1]))
            out.append(q)
            work.insert(i, q)
            acc = 0.0
        else:
            acc += d
        i += 1

    # Rounding can leave the walk one point short (or, rarely, one over)
    while len(out) < n:
        out.append(work[-1])
    del out[n:]
    return np.array(out, dtype=np.float64)


def indicative_angle(points: np.ndarray) -> float:
    """Angle from the first point to the centroid, in radians."""
    c = centroid(points)
    return math.atan2(c[1] - points[0, 1], c[0] - points[0, 0])


def rotate_to_zero(points: np.ndarray) -> np.ndarray:
    return rotate_by(points, -indicative_angle(points))


def scale_to(points: np.ndarray, size: float) -> np.ndarray:
    """Stretch x and y independently so the bounding box is ``size`` square.

    A degenerate axis (e.g. a perfectly straight stroke after rotation)
    is left unscaled.
    """
    box = bounding_box(points)
    span = np.array([box.width, box.height], dtype=np.float64)
    span = np.where(span < _EPS, size, span)
    return points * (size / span)


def translate_to(points: np.ndarray, origin) -> np.ndarray:
    return points + (np.asarray(origin, dtype=np.float64) - centroid(points))


def vectorize(points: np.ndarray) -> np.ndarray:
    """Flatten to [x0, y0, x1, y1, ...] and divide by the Euclidean norm."""
    vector = points.reshape(-1).astype(np.float64)
    magnitude = float(np.linalg.norm(vector))
    if magnitude < _EPS:
        raise InvalidInputError("normalized stroke has zero magnitude")
    return vector / magnitude


def normalize(points: Iterable, config: RecognizerConfig | None = None) -> NormalizedStroke:
    """Run the full pipeline on a raw stroke."""
    config = config or RecognizerConfig()
    pts = as_points(points)
    pts = resample(pts, config.num_points)
    pts = rotate_to_zero(pts)
    pts = scale_to(pts, config.square_size)
    pts = translate_to(pts, config.origin)
    vector = vectorize(pts)

    pts.flags.writeable = False
    vector.flags.writeable = False
    return NormalizedStroke(points=pts, vector=vector)
