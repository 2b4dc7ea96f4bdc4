from __future__ import annotations

from circuitbreakers import BreakerConfig, CircuitBreaker, ManualClock
from circuitbreakers.ui import buckets_frame, ordered_buckets_frame


def _breaker() -> tuple[CircuitBreaker, ManualClock]:
    clock = ManualClock()
    return CircuitBreaker(BreakerConfig(capacity=4, span_sec=1.0), clock=clock), clock


def test_buckets_frame() -> None:
    breaker, clock = _breaker()
    breaker.record_success()
    breaker.record_success()
    clock.advance(1.0)
    breaker.record_failure()

    frame = buckets_frame(breaker)

    assert list(frame.columns) == ["index", "success_count", "failure_count", "total", "current"]
    assert frame["index"].tolist() == [0, 1, 2, 3]
    assert frame["success_count"].tolist() == [2, 0, 0, 0]
    assert frame["failure_count"].tolist() == [0, 1, 0, 0]
    assert frame["current"].tolist() == [False, True, False, False]


def test_ordered_buckets_frame_ends_with_current() -> None:
    breaker, clock = _breaker()
    clock.advance(2.0)
    breaker.record_failure()

    frame = ordered_buckets_frame(breaker)

    assert frame["index"].tolist() == [3, 0, 1, 2]
    assert frame["age"].tolist() == [3, 2, 1, 0]
    assert bool(frame.iloc[-1]["current"])
