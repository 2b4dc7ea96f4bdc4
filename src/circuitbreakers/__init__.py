"""Circuit breaker backed by a time-bucketed rolling error rate.

Calls are reported to the breaker after they happen; the breaker decides
whether further calls should be attempted::

    breaker = CircuitBreaker(BreakerConfig(capacity=5, span_sec=60))
    if breaker.allow_request():
        try:
            fetch()
        except Exception:
            breaker.record_failure()
            raise
        breaker.record_success()

The breaker is not thread-safe; wrap it in a lock when sharing it.
"""

from __future__ import annotations

__version__ = "0.1.0"

from circuitbreakers.breaker import CircuitBreaker, State
from circuitbreakers.clock import Clock, ManualClock
from circuitbreakers.config import BreakerConfig, load_config
from circuitbreakers.window import BucketInfo, WindowedCounter

__all__ = [
    "BreakerConfig",
    "BucketInfo",
    "CircuitBreaker",
    "Clock",
    "ManualClock",
    "State",
    "WindowedCounter",
    "__version__",
    "load_config",
]
