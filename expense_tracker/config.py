from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Tuple

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_CONFIG: Dict[str, object] = {
    "data_dir": str(PACKAGE_ROOT),
    "expenses_file": "expenses.json",
    "budget_file": "budget.json",
    "export_dir": ".",
    "log_level": "WARNING",
    "table_justify": "left",
    "output_modules": {
        "csv": "expense_tracker.outputs.csv_output.CSVOutput",
        "table": "expense_tracker.outputs.table_output.TableOutput",
    },
}

CONFIG_PATH = Path("config.yaml")
DATA_DIR_ENV = "EXPENSE_TRACKER_DATA_DIR"
LOG_LEVEL_ENV = "EXPENSE_TRACKER_LOG_LEVEL"


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = value
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: Path | str | None = None, data_dir: str | None = None) -> Dict[str, object]:
    """Read the YAML config at ``path`` (defaults when missing) and apply overrides.

    ``data_dir`` wins over the ``EXPENSE_TRACKER_DATA_DIR`` environment
    variable, which wins over the file.
    """
    target = Path(path) if path else CONFIG_PATH
    data: Dict[str, object] = {}
    if target.exists():
        with target.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {target} must contain a mapping")
    config = _merge_defaults(data, DEFAULT_CONFIG)

    override = data_dir or os.getenv(DATA_DIR_ENV)
    if override:
        config["data_dir"] = override
    if os.getenv(LOG_LEVEL_ENV):
        config["log_level"] = os.getenv(LOG_LEVEL_ENV)
    return config


def resolve_paths(config: Dict[str, object]) -> Tuple[Path, Path]:
    """Return the (expenses, budget) JSON file paths for ``config``."""
    data_dir = Path(str(config["data_dir"])).expanduser()
    return (
        data_dir / str(config["expenses_file"]),
        data_dir / str(config["budget_file"]),
    )
