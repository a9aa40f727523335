from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict


class RunConfig(BaseModel):
    """Options for `metatesting run`."""

    model_config = ConfigDict(extra="forbid")
    verbose: bool = False
    show_timing: bool = True
    junit: str | None = None
    debug_log: str | None = None


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config = RunConfig(**raw)

    # Resolve relative output paths relative to config file location
    for key in ("junit", "debug_log"):
        value = getattr(config, key)
        if value is not None and not Path(value).is_absolute():
            setattr(config, key, str((config_dir / value).resolve()))

    return config
