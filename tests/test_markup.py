from __future__ import annotations

import math

import numpy as np
import pytest

from progresspath.geometry import Arc, CubicBezier, Line, PathGeometry
from progresspath.length import cubic_bezier_length, estimate_length
from progresspath.markup import PathMarkupError, parse_path_markup, to_path_markup
from progresspath.validation import UnsupportedSegmentKind


def test_empty_markup():
    assert parse_path_markup("").figures == ()
    assert parse_path_markup("   \n").figures == ()


def test_single_line():
    geometry = parse_path_markup("M0,0 L3,4")
    (figure,) = geometry.figures
    assert isinstance(figure.segments[0], Line)
    assert estimate_length(geometry) == 5.0


def test_relative_commands():
    geometry = parse_path_markup("m1,1 l3,4 h2 v-1")
    figure = geometry.figures[0]
    assert np.allclose(figure.start, [1, 1])
    assert np.allclose(figure.end_point, [6, 4])
    assert estimate_length(geometry) == pytest.approx(8.0)


def test_implicit_line_after_move():
    geometry = parse_path_markup("M0 0 1 0 1 1")
    assert len(geometry.figures[0].segments) == 2
    assert estimate_length(geometry) == pytest.approx(2.0)


def test_compact_numbers():
    geometry = parse_path_markup("M0-1L.5.5-1e1,0")
    figure = geometry.figures[0]
    assert np.allclose(figure.start, [0, -1])
    assert np.allclose(figure.end_point, [-10, 0])


def test_close_adds_closing_line():
    geometry = parse_path_markup("M0,0 L10,0 L10,10 Z")
    figure = geometry.figures[0]
    assert figure.closed
    assert len(figure.segments) == 3
    assert estimate_length(geometry) == pytest.approx(20 + math.hypot(10, 10))


def test_close_at_start_adds_nothing():
    figure = parse_path_markup("M0,0 L1,0 L0,0 z").figures[0]
    assert figure.closed
    assert len(figure.segments) == 2


def test_move_starts_new_figure():
    geometry = parse_path_markup("M0,0 L1,0 M5,5 L5,7")
    assert len(geometry.figures) == 2
    assert estimate_length(geometry) == pytest.approx(3.0)


def test_drawing_after_close_starts_new_figure():
    geometry = parse_path_markup("M0,0 L1,0 L1,1 Z l0,2")
    assert len(geometry.figures) == 2
    second = geometry.figures[1]
    assert np.allclose(second.start, [0, 0])
    assert np.allclose(second.end_point, [0, 2])


def test_cubic_and_smooth_cubic():
    geometry = parse_path_markup("M0,0 C0,1 1,1 1,0 S2,-1 2,0")
    first, second = geometry.figures[0].segments
    assert isinstance(second, CubicBezier)
    # Reflection of (1,1) about (1,0).
    assert np.allclose(second.control1, [1, -1])


def test_quadratic_is_elevated():
    geometry = parse_path_markup("M0,0 Q1,2 2,0")
    (segment,) = geometry.figures[0].segments
    assert isinstance(segment, CubicBezier)
    assert np.allclose(segment.control1, [2 / 3, 4 / 3])
    assert np.allclose(segment.control2, [4 / 3, 4 / 3])
    # Closed form for the parabola y = 2x - x^2 over [0, 2].
    expected = math.sqrt(5) + math.asinh(2) / 2
    assert estimate_length(geometry) == pytest.approx(expected, rel=1e-4)


def test_smooth_quadratic_reflects_control():
    geometry = parse_path_markup("M0,0 Q1,1 2,0 T4,0")
    second = geometry.figures[0].segments[1]
    assert np.allclose(second.control1, [2 + 2 / 3, -2 / 3])


def test_arc_is_parsed_and_rejected():
    geometry = parse_path_markup("M0,0 A5,5 0 0 1 10,0")
    (segment,) = geometry.figures[0].segments
    assert isinstance(segment, Arc)
    assert segment.size == (5.0, 5.0)
    assert segment.clockwise and not segment.large_arc
    with pytest.raises(UnsupportedSegmentKind):
        estimate_length(geometry)


@pytest.mark.parametrize(
    "markup",
    [
        "10 20",
        "M0,0 L1",
        "M0,0 X5,5",
        "L1,1",
        "M0,0 Z 4",
    ],
)
def test_invalid_markup(markup):
    with pytest.raises(PathMarkupError):
        parse_path_markup(markup)


def test_markup_error_is_value_error():
    with pytest.raises(ValueError):
        parse_path_markup("M0,0 L#")


def test_non_string_markup():
    with pytest.raises(PathMarkupError):
        parse_path_markup(None)


def test_to_path_markup_preserves_length(mixed_geometry):
    text = to_path_markup(mixed_geometry)
    assert text.startswith("M0,0 L3,4 L4,4 L4,5 M0,10 C")
    assert estimate_length(parse_path_markup(text)) == pytest.approx(estimate_length(mixed_geometry))


def test_to_path_markup_closed_figure():
    geometry = PathGeometry.from_points([(0, 0), (1, 0), (1, 1)], closed=True)
    assert to_path_markup(geometry) == "M0,0 L1,0 L1,1 L0,0 Z"


def test_bezier_from_markup_matches_primitive():
    geometry = parse_path_markup("M0,0 C0,10 10,10 10,0")
    assert estimate_length(geometry) == cubic_bezier_length((0, 0), (0, 10), (10, 10), (10, 0))


def test_arc_flags_without_separators():
    geometry = parse_path_markup("M0,0 A5,5 0 0110,0")
    (segment,) = geometry.figures[0].segments
    assert isinstance(segment, Arc)
    assert not segment.large_arc and segment.clockwise
    assert np.allclose(segment.end, [10, 0])


def test_repeated_compact_arcs():
    geometry = parse_path_markup("M0,0 a1,1 0 105,0 1,1 0 01-5,0")
    first, second = geometry.figures[0].segments
    assert first.large_arc and not first.clockwise
    assert np.allclose(first.end, [5, 0])
    assert not second.large_arc and second.clockwise
    assert np.allclose(second.end, [0, 0])
