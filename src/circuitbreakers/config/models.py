from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_CAPACITY = 5
DEFAULT_SPAN_SEC = 200.0
DEFAULT_MIN_EVAL_SIZE = 100
DEFAULT_ERROR_THRESHOLD = 10.0
DEFAULT_RETRY_TIMEOUT_SEC = 60.0
DEFAULT_TRIAL_SUCCESS_REQUIRED = 20


@dataclass(frozen=True, slots=True)
class BreakerConfig:
    """Immutable settings for a :class:`~circuitbreakers.breaker.CircuitBreaker`.

    ``error_threshold`` is a percentage (0-100) and is compared strictly:
    the breaker opens only when the rolling error rate is above it.
    """

    capacity: int = DEFAULT_CAPACITY
    span_sec: float = DEFAULT_SPAN_SEC
    min_eval_size: int = DEFAULT_MIN_EVAL_SIZE
    error_threshold: float = DEFAULT_ERROR_THRESHOLD
    retry_timeout_sec: float = DEFAULT_RETRY_TIMEOUT_SEC
    trial_success_required: int = DEFAULT_TRIAL_SUCCESS_REQUIRED

    @property
    def window_sec(self) -> float:
        return self.capacity * self.span_sec

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BreakerConfig":
        return cls(
            capacity=int(data.get("capacity", DEFAULT_CAPACITY)),
            span_sec=float(data.get("span_sec", DEFAULT_SPAN_SEC)),
            min_eval_size=int(data.get("min_eval_size", DEFAULT_MIN_EVAL_SIZE)),
            error_threshold=float(data.get("error_threshold", DEFAULT_ERROR_THRESHOLD)),
            retry_timeout_sec=float(data.get("retry_timeout_sec", DEFAULT_RETRY_TIMEOUT_SEC)),
            trial_success_required=int(
                data.get("trial_success_required", DEFAULT_TRIAL_SUCCESS_REQUIRED)
            ),
        )

    def to_metadata(self) -> Mapping[str, Any]:
        return {
            "capacity": self.capacity,
            "span_sec": self.span_sec,
            "min_eval_size": self.min_eval_size,
            "error_threshold": self.error_threshold,
            "retry_timeout_sec": self.retry_timeout_sec,
            "trial_success_required": self.trial_success_required,
        }
