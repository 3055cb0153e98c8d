"""
Operator settings loader.

Resolution order (later wins):
    1. built-in defaults
    2. optional YAML/JSON file
    3. PULSAR_OPERATOR_* environment variables

File format (YAML or JSON):
    env: prod
    host: 0.0.0.0
    port: 8081
    log_level: INFO
    metrics_enabled: true

Environment variable:
    PULSAR_OPERATOR_CONFIG_FILE — path to the settings file (optional).
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

_log = logging.getLogger("pulsar_operator.config")

ENV_PREFIX = "PULSAR_OPERATOR_"
CONFIG_FILE_ENV = ENV_PREFIX + "CONFIG_FILE"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class OperatorSettings(BaseModel):
    env: str = "dev"
    host: str = "0.0.0.0"
    port: int = 8081
    log_level: str = "INFO"
    metrics_enabled: bool = True

    @field_validator("env")
    @classmethod
    def _normalize_env(cls, v: str) -> str:
        return (v or "dev").strip().lower()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {v!r}")
        return level

    @field_validator("port")
    @classmethod
    def _check_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError(f"port out of range: {v}")
        return v


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_FILE_ENV, "").strip()
    if env_path:
        return Path(env_path)
    return None


def _read_file(path: Path) -> Dict[str, Any]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read settings file %s: %s", path, exc)
        return {}

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse settings file %s as JSON or YAML: %s", path, exc)
            return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        _log.warning("Settings file %s must be a mapping, got %s", path, type(data).__name__)
        return {}
    return data


def _read_env() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in OperatorSettings.model_fields:
        v = os.getenv(ENV_PREFIX + field.upper())
        if v is not None and v.strip():
            out[field] = v.strip()
    return out


def _apply(base: OperatorSettings, overrides: Dict[str, Any], source: str) -> OperatorSettings:
    current = base.model_dump()
    for key, value in overrides.items():
        if key not in OperatorSettings.model_fields:
            _log.warning("Ignoring unknown setting %r from %s", key, source)
            continue
        candidate = dict(current, **{key: value})
        try:
            OperatorSettings.model_validate(candidate)
        except ValidationError as exc:
            _log.warning("Skipping invalid setting %s=%r from %s: %s", key, value, source, exc.errors()[0]["msg"])
            continue
        current = candidate
    return OperatorSettings.model_validate(current)


def load_settings(path: Optional[Path] = None) -> OperatorSettings:
    settings = OperatorSettings()

    resolved = _resolve_path(path)
    if resolved is not None:
        if resolved.exists():
            settings = _apply(settings, _read_file(resolved), str(resolved))
        else:
            _log.warning("Settings file %s does not exist; using defaults", resolved)

    return _apply(settings, _read_env(), "environment")
