from __future__ import annotations

import importlib.util
import pathlib
import sys
import traceback
from types import ModuleType
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from progresspath._config import get_settings
from progresspath.dash import svg_dasharray
from progresspath.geometry import PathGeometry
from progresspath.length import estimate_length
from progresspath.markup import PathMarkupError, parse_path_markup
from progresspath.progress import ProgressPath
from progresspath.validation import ProgressPathError

console = Console()
app = typer.Typer(help="Measure vector paths and turn progress values into stroke dash patterns.")


class ModelBuildError(RuntimeError):
    """Raised when a model module cannot provide a usable path geometry."""


def _load_module(path: pathlib.Path) -> ModuleType:
    module_name = "progresspath_user_model"
    if module_name in sys.modules:
        del sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ModelBuildError(f"Unable to import model at {path}")

    module = importlib.util.module_from_spec(spec)
    # Register module so features relying on sys.modules (e.g., dataclasses) work.
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def _geometry_from_module(model_path: pathlib.Path) -> PathGeometry:
    module = _load_module(model_path)
    builder = getattr(module, "build", None)
    if builder is None or not callable(builder):
        raise ModelBuildError(f"{model_path} must define a callable build() function.")
    result = builder()
    if isinstance(result, str):
        return parse_path_markup(result)
    if not isinstance(result, PathGeometry):
        raise ModelBuildError(f"{model_path} build() must return a PathGeometry or path markup string.")
    return result


def _resolve_geometry(source: str) -> PathGeometry:
    """Treat ``source`` as a model module when it names a .py file, otherwise as path markup."""

    candidate = pathlib.Path(source)
    if candidate.suffix == ".py":
        if not candidate.exists():
            raise typer.BadParameter(f"Model path {candidate} does not exist.")
        try:
            return _geometry_from_module(candidate)
        except (ModelBuildError, PathMarkupError) as exc:
            raise typer.BadParameter(str(exc)) from exc
        except Exception as exc:
            console.print(Panel.fit(_format_exception(exc), title="Model build failed", style="red"))
            raise typer.BadParameter(f"Model execution failed: {exc}") from exc
    try:
        return parse_path_markup(source)
    except PathMarkupError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def length(
    source: str = typer.Argument(..., help="Path markup (e.g. 'M0,0 L3,4') or a .py file defining build()."),
) -> None:
    """
    Print the arc length of a path.
    """

    settings = get_settings()
    geometry = _resolve_geometry(source)
    try:
        total = estimate_length(geometry)
    except ProgressPathError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.print(f"[green]{len(geometry.figures)}[/green] figure(s)")
    console.print(f"Length: [bold]{total:.{settings.precision}g}[/bold]")


@app.command()
def dash(
    source: str = typer.Argument(..., help="Path markup (e.g. 'M0,0 L3,4') or a .py file defining build()."),
    progress: float = typer.Option(..., "--progress", "-p", help="Completion percentage, clamped to [0, 100]."),
    thickness: Optional[float] = typer.Option(
        None,
        "--thickness",
        "-t",
        help="Stroke thickness. Defaults to the value in progresspath.cfg.",
    ),
) -> None:
    """
    Compute the stroke dash pattern that draws PROGRESS percent of a path.
    """

    settings = get_settings()
    geometry = _resolve_geometry(source)
    stroke_thickness = settings.stroke_thickness if thickness is None else thickness
    try:
        host = ProgressPath(geometry, progress=progress, stroke_thickness=stroke_thickness)
    except ProgressPathError as exc:
        raise typer.BadParameter(str(exc)) from exc

    digits = settings.precision
    pattern = host.dash_pattern
    table = Table(show_header=False, box=None)
    table.add_row("Length", f"{host.path_length:.{digits}g}")
    table.add_row("Stroke thickness", f"{host.stroke_thickness:.{digits}g}")
    table.add_row("Dash", f"{pattern.dash_length:.{digits}g}")
    table.add_row("Gap", f"{pattern.gap_length:.{digits}g}")
    table.add_row("stroke-dasharray", svg_dasharray(pattern, host.stroke_thickness, precision=digits))
    console.print(Panel(table, title=f"Progress {host.progress:g}%", border_style="green"))


if __name__ == "__main__":
    app()
