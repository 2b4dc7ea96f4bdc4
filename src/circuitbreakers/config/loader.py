"""Configuration loading from YAML files and environment overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from circuitbreakers.config.models import BreakerConfig

logger = logging.getLogger(__name__)

ENV_MAP = {
    "capacity": "CB_CAPACITY",
    "span_sec": "CB_SPAN_SEC",
    "min_eval_size": "CB_MIN_EVAL_SIZE",
    "error_threshold": "CB_ERROR_THRESHOLD",
    "retry_timeout_sec": "CB_RETRY_TIMEOUT_SEC",
    "trial_success_required": "CB_TRIAL_SUCCESS_REQUIRED",
}


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    # Accept both a flat file and one nested under a ``circuit_breaker`` key.
    nested = data.get("circuit_breaker")
    if isinstance(nested, dict):
        return dict(nested)
    return data


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(config_data)
    for key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        logger.debug("Overriding %s from %s", key, env_name)
        merged[key] = os.environ[env_name]
    return merged


def load_config(config_path: str | Path | None = None) -> BreakerConfig:
    data: Dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        data = load_yaml(path)
    data = merge_env_overrides(data)
    return BreakerConfig.from_dict(data)
