# === FILE: script_scout/config.py ===
"""
Loading and validation of the ScriptScout run configuration.
Pydantic describes the schema and checks the data; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

__all__ = ["ScanConfig", "load_config"]


class ScanConfig(BaseModel):
    """Settings for one scan run. Read-only once the run has started."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    dom: bool = Field(False, description="Discover scripts from the rendered DOM.")
    secrets: bool = Field(False, description="Match secret patterns instead of listing strings.")
    urls: bool = Field(False, description="Report URLs as secrets (secrets mode only).")
    noisy: bool = Field(False, description="High-recall, low-precision matching.")
    verify: bool = Field(False, description="Attach the source URL to every finding.")
    file: bool = Field(False, description="Treat the target as a file with one URL per line.")

    timeout: float = Field(10.0, gt=0, description="Per-request HTTP timeout (seconds).")
    dom_timeout: float = Field(30.0, gt=0, description="Headless browser budget per URL (seconds).")
    browser: Literal["chromium", "static"] = Field(
        "chromium", description="DOM backend: a real headless browser or server HTML only."
    )
    user_agent: str = Field("ScriptScout/0.1", min_length=1, description="User-Agent header.")
    concurrency: int = Field(10, ge=1, description="Maximum URLs processed in parallel.")
    rate_limit: float = Field(1.0, gt=0, description="New URLs dispatched per second.")
    burst: int = Field(1, ge=1, description="Token bucket capacity.")
    max_pages: int = Field(1000, ge=1, description="Hard cap on URLs dispatched per run.")

    def with_overrides(self, **overrides: Any) -> ScanConfig:
        """Return a validated copy with the non-``None`` *overrides* applied."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ScanConfig(**data)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> ScanConfig:
    """
    Read YAML or JSON and return a validated ScanConfig.
    Without a path the defaults are used; a missing file raises FileNotFoundError.
    """
    if path is None:
        return ScanConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ScanConfig(**data)
