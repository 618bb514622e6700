"""Typed settings assembled from defaults, YAML files and environment variables."""
from __future__ import annotations

import json
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, MutableMapping, Optional, Union

import yaml
from pydantic import BaseModel, Field

_ENV_CONFIG_PATH_KEY = "MSTKIT_CONFIG"
_DEFAULT_ENV_PREFIX = "MSTKIT_"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_logs: bool = False
    colors: bool = False
    log_dir: Optional[str] = None
    capture_warnings: bool = True
    app_name: str = "mstkit"


class MSTConfig(BaseModel):
    """Options for spanning tree computation."""

    algorithm: Literal["partial_tree", "kruskal"] = "partial_tree"
    check_partition: bool = False
    enable_metrics: bool = True
    max_history: int = Field(default=1000, gt=0)


class Settings(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    mst: MSTConfig = Field(default_factory=MSTConfig)


def load_yaml_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML file, or every file of a directory: ``*.yml`` in name order, then ``*.yaml``."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config path {path} not found")
    if path.is_dir():
        data: Dict[str, Any] = {}
        for file in sorted(path.glob("*.yml")) + sorted(path.glob("*.yaml")):
            data = _deep_merge(data, _load_yaml(file))
        return data
    return _load_yaml(path)


def load_env_config(prefix: str = _DEFAULT_ENV_PREFIX, separator: str = "__") -> Dict[str, Any]:
    """Read overrides such as ``MSTKIT_MST__ALGORITHM=kruskal`` from the environment.

    Values are decoded as JSON when possible so booleans and numbers can be
    expressed directly.
    """

    payload: Dict[str, Any] = {}
    for key, raw_value in os.environ.items():
        if not key.startswith(prefix) or key == _ENV_CONFIG_PATH_KEY:
            continue
        path = key[len(prefix) :].lower().split(separator)
        cursor = payload
        for part in path[:-1]:
            cursor = cursor.setdefault(part, {})
        cursor[path[-1]] = _coerce_env_value(raw_value)
    return payload


def load_settings(
    path: Union[str, Path, None] = None,
    env_prefix: Optional[str] = _DEFAULT_ENV_PREFIX,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """Build :class:`Settings` from YAML ``path``, environment and ``overrides``.

    Later sources win; nested sections are merged key by key.
    Invalid values raise :class:`pydantic.ValidationError`.
    """

    merged: Dict[str, Any] = {}
    if path is not None:
        merged = _deep_merge(merged, load_yaml_config(path))
    if env_prefix:
        merged = _deep_merge(merged, load_env_config(env_prefix))
    if overrides:
        merged = _deep_merge(merged, overrides)
    return Settings.model_validate(merged)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings (lazy singleton)."""

    global _settings
    if _settings is None:
        _settings = load_settings(os.environ.get(_ENV_CONFIG_PATH_KEY))
    return _settings


def reload_settings() -> Settings:
    """Force a rebuild of the process-wide settings."""

    global _settings
    _settings = None
    return get_settings()


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"YAML config at {path} must produce a dictionary")
    return loaded


def _deep_merge(base: Dict[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    result = deepcopy(base)
    for key, value in incoming.items():
        if (
            key in result
            and isinstance(result[key], MutableMapping)
            and isinstance(value, Mapping)
        ):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


def _coerce_env_value(value: str) -> Any:
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        lowered = value.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        return value
