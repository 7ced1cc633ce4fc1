"""Path markup (SVG ``d`` attribute / WPF path mini-language) to :class:`PathGeometry`.

Relative and shorthand commands are resolved into absolute segments while
parsing. Quadratic curves are degree-elevated to cubics, so the geometry
model only ever holds lines, cubics and arcs.
"""

from __future__ import annotations

import re
from typing import Iterator, List

import numpy as np

from .geometry import Arc, CubicBezier, Figure, Line, PathGeometry, Polyline, Segment

COMMANDS = "MLHVCSQTAZmlhvcsqtaz"

TOKEN_PATTERN = re.compile(
    r"(?P<command>[" + COMMANDS + r"])"
    r"|(?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"|(?P<separator>[\s,]+)"
    r"|(?P<invalid>.)"
)

# Arc flags are single digits and may run into the next number ("0110,0").
FLAG_PATTERN = re.compile(r"[\s,]*([01])")

# Numbers consumed per repetition of each command.
ARG_COUNTS = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0}


class PathMarkupError(ValueError):
    """Raised when path markup cannot be parsed."""


def _tokenize(data: str) -> Iterator[tuple[str, List[float]]]:
    command: str | None = None
    args: List[float] = []
    pos = 0
    while pos < len(data):
        if command is not None and command.upper() == "A" and len(args) % 7 in (3, 4):
            flag = FLAG_PATTERN.match(data, pos)
            if flag is not None:
                args.append(float(flag.group(1)))
                pos = flag.end()
                continue
        match = TOKEN_PATTERN.match(data, pos)
        pos = match.end()
        kind = match.lastgroup
        if kind == "separator":
            continue
        if kind == "invalid":
            raise PathMarkupError(f"Unexpected character {match.group()!r} at position {match.start()}.")
        if kind == "command":
            if command is not None:
                yield command, args
            command, args = match.group(), []
            continue
        if command is None:
            raise PathMarkupError("Path markup must start with a command.")
        args.append(float(match.group()))
    if command is not None:
        yield command, args


def _groups(command: str, args: List[float]) -> Iterator[List[float]]:
    count = ARG_COUNTS[command.upper()]
    if count == 0:
        if args:
            raise PathMarkupError(f"{command} takes no arguments.")
        yield []
        return
    if not args or len(args) % count:
        raise PathMarkupError(f"{command} expects a multiple of {count} numbers, got {len(args)}.")
    for i in range(0, len(args), count):
        yield args[i : i + count]


class _FigureBuilder:
    def __init__(self) -> None:
        self.figures: List[Figure] = []
        self.start: np.ndarray | None = None
        self.current = np.zeros(2)
        self.segments: List[Segment] = []
        self.closed = False
        self.last_cubic_control: np.ndarray | None = None
        self.last_quad_control: np.ndarray | None = None

    def move_to(self, point: np.ndarray) -> None:
        self.flush()
        self.start = point
        self.current = point

    def add(self, segment: Segment) -> None:
        if self.start is None:
            raise PathMarkupError("Path markup must start with a move command.")
        if self.closed:
            # Drawing after Z without a move starts a new figure at the closing point.
            self.move_to(self.current)
        self.segments.append(segment)
        self.current = segment.end_point

    def close(self) -> None:
        if self.start is None:
            raise PathMarkupError("Path markup must start with a move command.")
        if not self.segments:
            return
        if not np.array_equal(self.current, self.start):
            self.segments.append(Line(self.start))
        self.current = self.start
        self.closed = True

    def flush(self) -> None:
        if self.start is not None and self.segments:
            self.figures.append(Figure(start=self.start, segments=tuple(self.segments), closed=self.closed))
        self.segments = []
        self.closed = False


def _elevate(start: np.ndarray, control: np.ndarray, end: np.ndarray) -> CubicBezier:
    # The cubic traces exactly the same curve as the quadratic.
    return CubicBezier(start + 2.0 / 3.0 * (control - start), end + 2.0 / 3.0 * (control - end), end)


def parse_path_markup(data: str) -> PathGeometry:
    """Parse path markup such as ``"M0,0 L3,4 C5,5 6,6 7,7 Z"``.

    Supports ``M L H V C S Q T A Z`` in absolute and relative form. A ``Z``
    that ends away from the figure start adds the closing line segment.
    Figures with no drawing commands are dropped.
    """
    if not isinstance(data, str):
        raise PathMarkupError("Path markup must be a string.")

    builder = _FigureBuilder()
    for command, args in _tokenize(data):
        upper = command.upper()
        relative = command.islower()
        for index, group in enumerate(_groups(command, args)):
            origin = builder.current if relative else np.zeros(2)
            cubic_control = None
            quad_control = None
            if upper == "M":
                point = origin + np.array(group, dtype=float)
                if index == 0:
                    builder.move_to(point)
                else:
                    builder.add(Line(point))
            elif upper == "L":
                builder.add(Line(origin + np.array(group, dtype=float)))
            elif upper == "H":
                x = group[0] + (builder.current[0] if relative else 0.0)
                builder.add(Line((x, builder.current[1])))
            elif upper == "V":
                y = group[0] + (builder.current[1] if relative else 0.0)
                builder.add(Line((builder.current[0], y)))
            elif upper == "C":
                c1 = origin + np.array(group[0:2], dtype=float)
                c2 = origin + np.array(group[2:4], dtype=float)
                end = origin + np.array(group[4:6], dtype=float)
                builder.add(CubicBezier(c1, c2, end))
                cubic_control = c2
            elif upper == "S":
                if builder.last_cubic_control is None:
                    c1 = builder.current
                else:
                    c1 = 2 * builder.current - builder.last_cubic_control
                c2 = origin + np.array(group[0:2], dtype=float)
                end = origin + np.array(group[2:4], dtype=float)
                builder.add(CubicBezier(c1, c2, end))
                cubic_control = c2
            elif upper == "Q":
                control = origin + np.array(group[0:2], dtype=float)
                end = origin + np.array(group[2:4], dtype=float)
                builder.add(_elevate(builder.current, control, end))
                quad_control = control
            elif upper == "T":
                if builder.last_quad_control is None:
                    control = builder.current
                else:
                    control = 2 * builder.current - builder.last_quad_control
                end = origin + np.array(group, dtype=float)
                builder.add(_elevate(builder.current, control, end))
                quad_control = control
            elif upper == "A":
                rx, ry, rotation, large_arc, sweep = group[:5]
                end = origin + np.array(group[5:7], dtype=float)
                builder.add(
                    Arc(
                        end,
                        size=(abs(rx), abs(ry)),
                        rotation_deg=rotation,
                        large_arc=bool(large_arc),
                        clockwise=bool(sweep),
                    )
                )
            else:
                builder.close()
            builder.last_cubic_control = cubic_control
            builder.last_quad_control = quad_control
    builder.flush()
    return PathGeometry(figures=tuple(builder.figures))


def _fmt(point: np.ndarray) -> str:
    return f"{point[0]:.12g},{point[1]:.12g}"


def to_path_markup(geometry: PathGeometry) -> str:
    """Write ``geometry`` back out as absolute path markup."""
    parts: List[str] = []
    for figure in geometry.figures:
        parts.append(f"M{_fmt(figure.start)}")
        for segment in figure.segments:
            if isinstance(segment, Line):
                parts.append(f"L{_fmt(segment.end)}")
            elif isinstance(segment, Polyline):
                parts.extend(f"L{_fmt(p)}" for p in segment.points)
            elif isinstance(segment, CubicBezier):
                parts.append(f"C{_fmt(segment.control1)} {_fmt(segment.control2)} {_fmt(segment.end)}")
            elif isinstance(segment, Arc):
                rx, ry = segment.size
                parts.append(
                    f"A{rx:.12g},{ry:.12g} {segment.rotation_deg:.12g} "
                    f"{int(segment.large_arc)} {int(segment.clockwise)} {_fmt(segment.end)}"
                )
        if figure.closed:
            parts.append("Z")
    return " ".join(parts)


__all__ = ["PathMarkupError", "parse_path_markup", "to_path_markup"]
