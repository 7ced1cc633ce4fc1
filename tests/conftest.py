from __future__ import annotations

from pathlib import Path

import pytest

from progresspath.geometry import CubicBezier, Figure, Line, PathGeometry, Polyline

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep progresspath.cfg out of the real home directory."""
    home = tmp_path / "progresspath-home"
    monkeypatch.setenv("PROGRESSPATH_HOME", str(home))
    return home


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def mixed_geometry() -> PathGeometry:
    """Two figures: a 3-4-5 line plus a unit polyline, and a straight-line cubic of length 10."""
    first = Figure(
        start=(0, 0),
        segments=(Line((3, 4)), Polyline([(4, 4), (4, 5)])),
    )
    second = Figure(
        start=(0, 10),
        segments=(CubicBezier((10 / 3, 10), (20 / 3, 10), (10, 10)),),
    )
    return PathGeometry(figures=(first, second))
