from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .validation import validate_stroke_thickness


@dataclass(frozen=True)
class DashPattern:
    """Two-element dash array in units of stroke thickness."""

    dash_length: float
    gap_length: float

    def __iter__(self) -> Iterator[float]:
        yield self.dash_length
        yield self.gap_length

    def as_tuple(self) -> tuple[float, float]:
        return (self.dash_length, self.gap_length)

    def to_user_units(self, stroke_thickness: float) -> tuple[float, float]:
        thickness = validate_stroke_thickness(stroke_thickness)
        return (self.dash_length * thickness, self.gap_length * thickness)


def compute_dash_pattern(path_length: float, stroke_thickness: float, progress: float) -> DashPattern:
    """Map a progress percentage onto a dash pattern for a path of ``path_length``.

    The gap always spans the whole normalized path so the dash is drawn once.
    ``progress`` is not clamped; values outside [0, 100] extrapolate linearly.
    """
    thickness = validate_stroke_thickness(stroke_thickness)
    gap_length = float(path_length) / thickness
    dash_length = gap_length * (float(progress) / 100)
    return DashPattern(dash_length=dash_length, gap_length=gap_length)


def svg_dasharray(pattern: DashPattern, stroke_thickness: float, precision: int = 6) -> str:
    """Format ``pattern`` as an SVG ``stroke-dasharray`` value (user units)."""
    dash, gap = pattern.to_user_units(stroke_thickness)
    return f"{dash:.{precision}g} {gap:.{precision}g}"


__all__ = ["DashPattern", "compute_dash_pattern", "svg_dasharray"]
