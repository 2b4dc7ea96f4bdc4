from __future__ import annotations

from circuitbreakers.config.loader import ENV_MAP, load_config, load_yaml, merge_env_overrides
from circuitbreakers.config.models import BreakerConfig

__all__ = [
    "ENV_MAP",
    "BreakerConfig",
    "load_config",
    "load_yaml",
    "merge_env_overrides",
]
