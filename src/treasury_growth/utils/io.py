"""treasury_growth.utils.io

Artifact IO for scripts and the runner.

- YAML for run configs and config snapshots (the top level must be a mapping)
- JSON for run summaries; non-finite floats are written as ``null`` so the
  files stay valid JSON
- CSV for month-indexed tables

Writers create missing parent directories.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np
import pandas as pd
import yaml

from .validation import PreconditionError

PathLike = Union[str, Path]


def ensure_dir(path: PathLike) -> Path:
    """Create ``path`` as a directory (or the parent of a file path) and return it."""

    p = Path(path)
    target = p.parent if p.suffix else p
    target.mkdir(parents=True, exist_ok=True)
    return target


def load_yaml(path: PathLike) -> Dict[str, Any]:
    """Read a run config; an empty file yields ``{}``."""

    with Path(path).open("r", encoding="utf-8") as f:
        obj = yaml.safe_load(f)
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise PreconditionError(f"{path}: expected a mapping at the top level, got {type(obj).__name__}")
    return obj


def save_yaml(obj: Dict[str, Any], path: PathLike) -> None:
    p = Path(path)
    ensure_dir(p)
    with p.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _json_safe(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k): _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_json_safe(v) for v in obj]
    if isinstance(obj, np.generic):
        obj = obj.item()
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


def load_json(path: PathLike) -> Any:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def save_json(obj: Any, path: PathLike, *, indent: int = 2) -> None:
    """Write a summary dict as strict JSON (NaN/inf become ``null``)."""

    p = Path(path)
    ensure_dir(p)
    with p.open("w", encoding="utf-8") as f:
        json.dump(_json_safe(obj), f, indent=indent, allow_nan=False)


def save_csv(df: pd.DataFrame, path: PathLike, *, index: bool = True) -> None:
    p = Path(path)
    ensure_dir(p)
    df.to_csv(p, index=index)


__all__ = [
    "PathLike",
    "ensure_dir",
    "load_yaml",
    "save_yaml",
    "load_json",
    "save_json",
    "save_csv",
]
