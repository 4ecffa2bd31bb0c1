"""Generate JSON Schema for the testy YAML config."""

from __future__ import annotations

import json
from pathlib import Path

from testy.config import FacadeConfig


def generate_json_schema() -> dict:
    schema = FacadeConfig.model_json_schema()
    schema["title"] = "testy config"
    return schema


def write_json_schema(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    schema = generate_json_schema()
    path.write_text(json.dumps(schema, indent=2) + "\n")
