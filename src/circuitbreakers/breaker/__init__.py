from __future__ import annotations

from circuitbreakers.breaker.core import CircuitBreaker
from circuitbreakers.breaker.state import State

__all__ = ["CircuitBreaker", "State"]
