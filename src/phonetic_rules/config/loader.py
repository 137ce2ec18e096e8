"""Load and validate rule configuration from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml

from .schema import RulesConfig


def load_config(path: Path | str) -> RulesConfig:
    """Read a YAML file and return a validated RulesConfig.

    A relative ``sources.rules_dir`` is resolved against the directory
    containing the file.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        raw = {}
    cfg = RulesConfig.model_validate(raw)
    if not cfg.sources.rules_dir.is_absolute():
        cfg.sources.rules_dir = path.parent / cfg.sources.rules_dir
    return cfg
