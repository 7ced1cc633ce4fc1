from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np


def _to_vec2(value: Sequence[float], label: str = "point") -> np.ndarray:
    """Coerce ``value`` into a float 2-vector.

    NaN and infinite coordinates are passed through untouched; they propagate
    into lengths instead of being rejected here.
    """
    try:
        arr = np.asarray(value, dtype=float).reshape(2)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D coordinate.") from exc
    return arr


@dataclass(frozen=True)
class Line:
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "end", _to_vec2(self.end, "end"))

    @property
    def end_point(self) -> np.ndarray:
        return self.end


@dataclass(frozen=True)
class Polyline:
    points: np.ndarray

    def __post_init__(self) -> None:
        pts = list(self.points)
        if not pts:
            raise ValueError("Polyline requires at least one point.")
        arr = np.vstack([_to_vec2(p, "point") for p in pts])
        object.__setattr__(self, "points", arr)

    @property
    def end_point(self) -> np.ndarray:
        return self.points[-1]


@dataclass(frozen=True)
class CubicBezier:
    control1: np.ndarray
    control2: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "control1", _to_vec2(self.control1, "control1"))
        object.__setattr__(self, "control2", _to_vec2(self.control2, "control2"))
        object.__setattr__(self, "end", _to_vec2(self.end, "end"))

    @property
    def end_point(self) -> np.ndarray:
        return self.end


@dataclass(frozen=True)
class Arc:
    """Elliptical arc to ``end``. Carried through the model but never measured."""

    end: np.ndarray
    size: Tuple[float, float] = (1.0, 1.0)
    rotation_deg: float = 0.0
    large_arc: bool = False
    clockwise: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "end", _to_vec2(self.end, "end"))
        rx, ry = (float(v) for v in self.size)
        if rx < 0 or ry < 0:
            raise ValueError("size must be non-negative.")
        object.__setattr__(self, "size", (rx, ry))

    @property
    def end_point(self) -> np.ndarray:
        return self.end


Segment = Line | Polyline | CubicBezier | Arc


@dataclass(frozen=True)
class Figure:
    start: np.ndarray
    segments: Tuple[Segment, ...] = ()
    closed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _to_vec2(self.start, "start"))
        segments = tuple(self.segments)
        for segment in segments:
            if not isinstance(segment, (Line, Polyline, CubicBezier, Arc)):
                raise TypeError(f"Unsupported segment object: {type(segment).__name__}.")
        object.__setattr__(self, "segments", segments)

    @property
    def end_point(self) -> np.ndarray:
        if not self.segments:
            return self.start
        return self.segments[-1].end_point

    def walk(self) -> Iterator[tuple[np.ndarray, Segment]]:
        """Yield ``(start_point, segment)`` pairs in drawing order."""
        current = self.start
        for segment in self.segments:
            yield current, segment
            current = segment.end_point

    def points(self) -> np.ndarray:
        pts = [self.start]
        for segment in self.segments:
            if isinstance(segment, Polyline):
                pts.extend(segment.points)
            else:
                pts.append(segment.end_point)
        return np.vstack(pts)


@dataclass(frozen=True)
class PathGeometry:
    figures: Tuple[Figure, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "figures", tuple(self.figures))

    @classmethod
    def empty(cls) -> "PathGeometry":
        return cls()

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]], closed: bool = False) -> "PathGeometry":
        pts = [_to_vec2(p, "point") for p in points]
        if len(pts) < 2:
            raise ValueError("PathGeometry requires at least two points.")
        tail = list(pts[1:])
        if closed and not np.allclose(pts[0], pts[-1]):
            tail.append(pts[0])
        figure = Figure(start=pts[0], segments=(Polyline(tail),), closed=closed)
        return cls(figures=(figure,))

    def segments(self) -> Iterator[tuple[np.ndarray, Segment]]:
        for figure in self.figures:
            yield from figure.walk()

    def has_arcs(self) -> bool:
        return any(isinstance(segment, Arc) for _, segment in self.segments())


__all__ = [
    "Arc",
    "CubicBezier",
    "Figure",
    "Line",
    "PathGeometry",
    "Polyline",
    "Segment",
]
