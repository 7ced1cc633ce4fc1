from __future__ import annotations

import warnings
from typing import Literal

from .dash import DashPattern, compute_dash_pattern
from .geometry import PathGeometry
from .length import estimate_length
from .validation import UnsupportedSegmentKind, validate_stroke_thickness

UnsupportedPolicy = Literal["raise", "skip"]


class ProgressPath:
    """Hold a path, a progress value and a stroke thickness, and keep the dash pattern current.

    The path length is measured only when the geometry is replaced; progress and
    thickness changes reuse the cached length.
    """

    def __init__(
        self,
        geometry: PathGeometry | None = None,
        progress: float = 0.0,
        stroke_thickness: float = 1.0,
        *,
        clamp_progress: bool = True,
        on_unsupported: UnsupportedPolicy = "raise",
    ) -> None:
        if on_unsupported not in ("raise", "skip"):
            raise ValueError("on_unsupported must be 'raise' or 'skip'.")
        self.clamp_progress = clamp_progress
        self.on_unsupported = on_unsupported
        self._progress = float(progress)
        self._stroke_thickness = validate_stroke_thickness(stroke_thickness)
        self._geometry = PathGeometry.empty()
        self._path_length = 0.0
        self._dash_pattern = DashPattern(0.0, 0.0)
        self.length_computations = 0
        self.geometry = geometry

    @property
    def geometry(self) -> PathGeometry:
        return self._geometry

    @geometry.setter
    def geometry(self, geometry: PathGeometry | None) -> None:
        geometry = geometry if geometry is not None else PathGeometry.empty()
        self._path_length = self._measure(geometry)
        self._geometry = geometry
        self._update()

    @property
    def progress(self) -> float:
        return self._progress

    @progress.setter
    def progress(self, value: float) -> None:
        self._progress = float(value)
        self._update()

    @property
    def stroke_thickness(self) -> float:
        return self._stroke_thickness

    @stroke_thickness.setter
    def stroke_thickness(self, value: float) -> None:
        self._stroke_thickness = validate_stroke_thickness(value)
        self._update()

    @property
    def path_length(self) -> float:
        return self._path_length

    @property
    def dash_pattern(self) -> DashPattern:
        return self._dash_pattern

    def _measure(self, geometry: PathGeometry) -> float:
        try:
            length = estimate_length(geometry)
        except UnsupportedSegmentKind as exc:
            if self.on_unsupported == "raise":
                raise
            warnings.warn(
                f"{exc} Progress will not be drawn for this path.",
                RuntimeWarning,
            )
            length = 0.0
        self.length_computations += 1
        return length

    def _effective_progress(self) -> float:
        if not self.clamp_progress:
            return self._progress
        return min(max(self._progress, 0.0), 100.0)

    def _update(self) -> None:
        self._dash_pattern = compute_dash_pattern(
            self._path_length,
            self._stroke_thickness,
            self._effective_progress(),
        )


__all__ = ["ProgressPath", "UnsupportedPolicy"]
