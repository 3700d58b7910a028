from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml

from config import DEFAULT_CONFIG_PATH, StrategySettings, apply_env_overrides


def load_strategy_settings(path: Optional[Path] = None, *, environ: Optional[dict] = None) -> StrategySettings:
    """
    Loads and validates strategy settings.

    An explicit path must exist. Without one, config/strategy.yaml is used when
    present, otherwise built-in defaults. Environment variables win over both.
    """
    if path is not None and not path.exists():
        raise FileNotFoundError(f"Strategy config file not found: {path}")

    p = path or DEFAULT_CONFIG_PATH
    raw = {}
    if p.exists():
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Strategy config must be a mapping, got {type(raw).__name__}: {p}")

    return StrategySettings.model_validate(apply_env_overrides(raw, environ))
