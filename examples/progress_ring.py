"""Example progresspath model: a circular ring made of four cubic quarter arcs.

    progresspath dash examples/progress_ring.py --progress 65 --thickness 4
"""

from __future__ import annotations

from progresspath import CubicBezier, Figure, PathGeometry

RADIUS = 50.0
# Control distance for a cubic quarter circle.
KAPPA = 0.5522847498


def build():
    r, k = RADIUS, RADIUS * KAPPA
    quarters = (
        CubicBezier((r, k), (k, r), (0, r)),
        CubicBezier((-k, r), (-r, k), (-r, 0)),
        CubicBezier((-r, -k), (-k, -r), (0, -r)),
        CubicBezier((k, -r), (r, -k), (r, 0)),
    )
    return PathGeometry(figures=(Figure(start=(r, 0), segments=quarters, closed=True),))
