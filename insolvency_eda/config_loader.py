from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict

from .config_models import ReportConfig


def _read_config(path: Path) -> Dict[str, Any]:
    suf = path.suffix.lower()
    if suf == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    if suf == ".toml":
        return tomllib.loads(path.read_text(encoding="utf-8"))
    raise ValueError(f"Unsupported config format: {path.suffix}. Use .toml or .json")


def load_report_config(path: Path) -> ReportConfig:
    data = _read_config(path)
    config = ReportConfig(**data)
    # Relative paths in the file are relative to the file itself
    if not config.filings.is_absolute():
        config.filings = path.parent / config.filings
    if config.output_dir is not None and not config.output_dir.is_absolute():
        config.output_dir = path.parent / config.output_dir
    return config
