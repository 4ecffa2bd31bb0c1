from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field


class FacadeConfig(BaseModel):
    """Settings shared by every facade derived from one root."""

    model_config = ConfigDict(extra="forbid")
    full_paths: bool = False
    indent: int = Field(default=4, ge=0)
    log_file: str | None = None
    verbose: bool = False
    junit_file: str | None = None


_PATH_KEYS = ("log_file", "junit_file")


def _expand(value: Any) -> Any:
    if isinstance(value, str):
        return expandvars(value)
    return value


def load_config(path: Path) -> FacadeConfig:
    """Load and validate a facade config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(raw).__name__}")

    config = FacadeConfig(**{key: _expand(value) for key, value in raw.items()})

    # Resolve relative output paths relative to config file location
    for key in _PATH_KEYS:
        value = getattr(config, key)
        if value is not None and not Path(value).is_absolute():
            setattr(config, key, str((config_dir / value).resolve()))

    return config
