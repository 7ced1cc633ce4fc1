from __future__ import annotations

from typing import Sequence

import numpy as np

from .geometry import Arc, CubicBezier, Figure, Line, PathGeometry, Polyline, Segment
from .validation import UnsupportedSegmentKind

BEZIER_STEP = 0.001
BEZIER_SAMPLES = 1000

# Sample parameters t = k * step for k = 1..1000; built from the integer index so t = 1.0 is exact.
_BEZIER_T = (np.arange(1, BEZIER_SAMPLES + 1, dtype=float) * BEZIER_STEP).reshape(-1, 1)


def line_length(start: Sequence[float], end: Sequence[float]) -> float:
    delta = np.asarray(end, dtype=float) - np.asarray(start, dtype=float)
    return float(np.hypot(delta[0], delta[1]))


def polyline_length(points: Sequence[Sequence[float]] | np.ndarray) -> float:
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if pts.shape[0] < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())


def bezier_point(
    p0: Sequence[float],
    p1: Sequence[float],
    p2: Sequence[float],
    p3: Sequence[float],
    t: float | np.ndarray,
) -> np.ndarray:
    """Evaluate the cubic Bernstein form at ``t`` (scalar or column of parameters).

    Offsets are taken from ``p0`` so coincident control points evaluate to ``p0`` exactly.
    """
    t = np.asarray(t, dtype=float)
    if t.ndim == 1:
        t = t.reshape(-1, 1)
    origin = np.asarray(p0, dtype=float)
    b = 3 * t * (1 - t) ** 2
    c = 3 * t**2 * (1 - t)
    d = t**3
    return (
        origin
        + b * (np.asarray(p1, dtype=float) - origin)
        + c * (np.asarray(p2, dtype=float) - origin)
        + d * (np.asarray(p3, dtype=float) - origin)
    )


def cubic_bezier_length(
    p0: Sequence[float],
    p1: Sequence[float],
    p2: Sequence[float],
    p3: Sequence[float],
) -> float:
    """Approximate the arc length of a cubic curve by fixed-step chord sampling.

    The curve is evaluated at ``t = 0.001, 0.002, ..., 1.0`` and the chord
    lengths between consecutive samples are summed, starting from ``p0``.
    The step count is fixed regardless of curve size or curvature.
    """
    samples = bezier_point(p0, p1, p2, p3, _BEZIER_T)
    pts = np.vstack([np.asarray(p0, dtype=float).reshape(1, 2), samples])
    return polyline_length(pts)


def segment_length(start: Sequence[float], segment: Segment) -> float:
    if isinstance(segment, Line):
        return line_length(start, segment.end)
    if isinstance(segment, Polyline):
        return polyline_length(np.vstack([np.asarray(start, dtype=float), segment.points]))
    if isinstance(segment, CubicBezier):
        return cubic_bezier_length(start, segment.control1, segment.control2, segment.end)
    if isinstance(segment, Arc):
        raise UnsupportedSegmentKind("arc")
    raise TypeError(f"Unsupported segment object: {type(segment).__name__}.")


def figure_length(figure: Figure) -> float:
    total = 0.0
    for start, segment in figure.walk():
        total += segment_length(start, segment)
    return total


def estimate_length(geometry: PathGeometry) -> float:
    """Return the total arc length of every figure in ``geometry``.

    Raises :class:`UnsupportedSegmentKind` if any segment is an arc.
    """
    total = 0.0
    for figure in geometry.figures:
        total += figure_length(figure)
    return total


__all__ = [
    "BEZIER_STEP",
    "bezier_point",
    "cubic_bezier_length",
    "estimate_length",
    "figure_length",
    "line_length",
    "polyline_length",
    "segment_length",
]
