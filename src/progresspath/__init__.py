"""progresspath – measure vector paths and draw progress along them."""

from __future__ import annotations

from .dash import DashPattern, compute_dash_pattern, svg_dasharray
from .geometry import Arc, CubicBezier, Figure, Line, PathGeometry, Polyline, Segment
from .length import estimate_length
from .markup import PathMarkupError, parse_path_markup, to_path_markup
from .progress import ProgressPath
from .validation import InvalidStrokeThickness, ProgressPathError, UnsupportedSegmentKind

__all__ = [
    "Arc",
    "CubicBezier",
    "DashPattern",
    "Figure",
    "InvalidStrokeThickness",
    "Line",
    "PathGeometry",
    "PathMarkupError",
    "Polyline",
    "ProgressPath",
    "ProgressPathError",
    "Segment",
    "UnsupportedSegmentKind",
    "__version__",
    "compute_dash_pattern",
    "estimate_length",
    "parse_path_markup",
    "svg_dasharray",
    "to_path_markup",
]

__version__ = "0.1.0"
