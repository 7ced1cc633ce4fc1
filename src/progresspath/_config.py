from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_FILENAME = "progresspath.cfg"
DEFAULT_CONFIG = {
    "_comment": "stroke_thickness: default --thickness for the CLI (> 0). precision: significant digits shown.",
    "stroke_thickness": 1.0,
    "precision": 4,
}


@dataclass(frozen=True)
class Settings:
    """Resolved values from progresspath.cfg."""

    stroke_thickness: float
    precision: int


def config_dir() -> Path:
    override = os.environ.get("PROGRESSPATH_HOME")
    if override:
        return Path(override)
    return Path.home() / ".progresspath"


def config_file() -> Path:
    return config_dir() / CONFIG_FILENAME


def ensure_user_config() -> None:
    """Ensure the config file exists with sane defaults."""

    directory = config_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    path = directory / CONFIG_FILENAME
    if path.exists():
        return

    try:
        path.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(config_file().read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def _positive_float(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number <= 0:
        return default
    return number


def _precision(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < 1 or number > 17:
        return default
    return number


def get_settings() -> Settings:
    """Return CLI defaults, falling back per key when a value is unusable."""

    raw_config = _load_user_config()
    return Settings(
        stroke_thickness=_positive_float(raw_config.get("stroke_thickness"), DEFAULT_CONFIG["stroke_thickness"]),
        precision=_precision(raw_config.get("precision"), DEFAULT_CONFIG["precision"]),
    )
