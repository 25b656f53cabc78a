"""Layered config loading: defaults < YAML < env (.env included) < overrides."""

from __future__ import annotations

from collections.abc import Iterator
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_TOP_LEVEL_KEYS = ("app_name", "environment")

# Flat spelling (env vars, overrides) -> (section, key) in config.yaml.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "cache_backend": ("cache", "backend"),
    "cache_dir": ("cache", "dir"),
    "cache_namespace": ("cache", "namespace"),
    "cache_default_lifetime": ("cache", "default_lifetime"),
}

_SECTIONS = frozenset(section for section, _ in _FLAT_KEYS.values())


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Bring a layer into config.yaml shape, accepting flat and sectioned keys.

    Unknown keys are dropped.
    """
    out: dict[str, Any] = {k: layer[k] for k in _TOP_LEVEL_KEYS if k in layer}
    for section in _SECTIONS:
        if isinstance(layer.get(section), Mapping):
            out[section] = dict(layer[section])
    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]
    return out


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> None:
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            target[key] = value


def _require_file(path: Path) -> Path:
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def _layers(
    config_path: Path | None, overrides: Mapping[str, Any]
) -> Iterator[Mapping[str, Any]]:
    yield deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        parsed = yaml.safe_load(_require_file(config_path).read_text(encoding="utf-8"))
        if parsed is not None and not isinstance(parsed, dict):
            raise ValueError(f"{config_path}: config YAML must be a mapping, got {type(parsed)!r}")
        yield parsed or {}

    yield EnvOverrides().to_update_dict()
    yield overrides


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Merge every layer, later ones winning, and validate the result.

    ``dotenv_path`` is loaded into the process environment first (without
    replacing variables already set), so it counts as part of the env layer.
    Reads files only.

    Raises:
        FileNotFoundError: If ``config_path`` or ``dotenv_path`` is missing.
        ValueError: If the YAML document is not a mapping.
        pydantic.ValidationError: If the merged config is invalid.
    """
    if dotenv_path is not None:
        load_dotenv(_require_file(dotenv_path), override=False)

    merged: dict[str, Any] = {}
    for layer in _layers(config_path, overrides or {}):
        _merge_into(merged, _sectioned(layer))
    return AppConfig.model_validate(merged)
