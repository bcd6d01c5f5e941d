"""Artifact IO tests: YAML configs and strict JSON summaries."""

from __future__ import annotations

import numpy as np
import pytest

from treasury_growth.utils.io import ensure_dir, load_json, load_yaml, save_json
from treasury_growth.utils.validation import PreconditionError


def test_save_json_writes_non_finite_values_as_null(tmp_path) -> None:
    path = tmp_path / "out" / "summary.json"
    save_json(
        {"value_multiple": float("nan"), "cap": float("inf"), "months": np.int64(12), "fee": np.float64(0.5)},
        path,
    )
    text = path.read_text(encoding="utf-8")
    assert "NaN" not in text and "Infinity" not in text
    assert load_json(path) == {"value_multiple": None, "cap": None, "months": 12, "fee": 0.5}


def test_load_yaml_empty_file_is_empty_mapping(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_yaml(path) == {}


def test_load_yaml_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(PreconditionError):
        load_yaml(path)


def test_ensure_dir_creates_parent_of_file_path(tmp_path) -> None:
    out = ensure_dir(tmp_path / "a" / "b" / "table.csv")
    assert out == tmp_path / "a" / "b"
    assert out.is_dir()
