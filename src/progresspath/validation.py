from __future__ import annotations

import math


class ProgressPathError(Exception):
    """Base class for errors raised by progress path computations."""


class UnsupportedSegmentKind(ProgressPathError, NotImplementedError):
    """Raised when a path contains a segment whose length cannot be measured."""

    def __init__(self, segment_kind: str) -> None:
        super().__init__(f"Length of {segment_kind} segments is not supported.")
        self.segment_kind = segment_kind


class InvalidStrokeThickness(ProgressPathError, ValueError):
    """Raised when a stroke thickness is zero, negative or NaN."""

    def __init__(self, stroke_thickness: float) -> None:
        super().__init__(f"stroke_thickness must be positive, got {stroke_thickness!r}.")
        self.stroke_thickness = stroke_thickness


def validate_stroke_thickness(stroke_thickness: float) -> float:
    value = float(stroke_thickness)
    if math.isnan(value) or value <= 0:
        raise InvalidStrokeThickness(stroke_thickness)
    return value
