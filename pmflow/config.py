"""
Settings loader.

Defaults live in the ``config.yaml`` file shipped with the package.  A
user file passed to `load_settings` is merged over those defaults
section by section, so it only needs to list the values it changes.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml  # type: ignore

from .exceptions import ConfigurationError
from .normalize.records import SORT_KEYS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")


@dataclass
class Settings:
    url: str
    table_class: str
    column_header: str
    timeout: float
    cache_path: str
    sort_by: Optional[str]
    csv_path: str
    chart_path: str
    current_year: Optional[int]
    title: Optional[str]
    simulate_n: int
    simulate_seed: int
    simulate_min_prop: float
    born_range: Tuple[int, int]
    lifespan_range: Tuple[int, int]
    simulate_out: str

    def resolved_current_year(self) -> int:
        return self.current_year or date.today().year


def _load_yaml_file(file_path: Path) -> Dict[str, Any]:
    if not os.path.exists(file_path):
        raise ConfigurationError(f"Configuration file not found: {file_path}")
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {file_path} must be a mapping")
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _pair(value: Any, name: str) -> Tuple[int, int]:
    try:
        low, high = (int(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a two-element list of integers") from exc
    if low > high:
        raise ConfigurationError(f"{name} lower bound {low} exceeds upper bound {high}")
    return low, high


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from the packaged defaults plus an optional user file.

    Raises:
        ConfigurationError: If a file is missing, malformed or a value
            has the wrong shape.
    """
    raw = _load_yaml_file(DEFAULT_CONFIG_PATH)
    if path:
        raw = _merge(raw, _load_yaml_file(Path(path)))
        logger.debug("Loaded settings from %s", path)
    try:
        source, cache = raw["source"], raw["cache"]
        output, report = raw["output"], raw["report"]
        normalize, simulate = raw["normalize"], raw["simulate"]
        current_year = report.get("current_year")
        sort_by = normalize.get("sort_by")
        if sort_by is not None and sort_by not in SORT_KEYS:
            raise ConfigurationError(
                f"normalize.sort_by must be one of {sorted(SORT_KEYS)} or null, got {sort_by!r}"
            )
        return Settings(
            url=source["url"],
            table_class=source.get("table_class", "wikitable"),
            column_header=source["column_header"],
            timeout=float(source.get("timeout", 30)),
            cache_path=cache["path"],
            sort_by=sort_by,
            csv_path=output["csv"],
            chart_path=output["chart"],
            current_year=int(current_year) if current_year is not None else None,
            title=report.get("title"),
            simulate_n=int(simulate.get("n", 10)),
            simulate_seed=int(simulate.get("seed", 853)),
            simulate_min_prop=float(simulate.get("min_prop", 0.01)),
            born_range=_pair(simulate.get("born_range", (1800, 1950)), "simulate.born_range"),
            lifespan_range=_pair(simulate.get("lifespan_range", (60, 100)), "simulate.lifespan_range"),
            simulate_out=simulate.get("out", "simulated_data.csv"),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required setting: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid setting value: {exc}") from exc
