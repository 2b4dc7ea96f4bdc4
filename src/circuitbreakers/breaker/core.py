"""Three-state circuit breaker driven by a :class:`WindowedCounter`.

There is no background timer. Every call reconciles time-based transitions
against the caller's ``now`` before doing anything else, so an idle breaker
catches up on the first call after the pause.

Not thread-safe: callers sharing a breaker must serialize access themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from circuitbreakers.clock import Clock, monotonic
from circuitbreakers.config import BreakerConfig
from circuitbreakers.breaker.state import State
from circuitbreakers.window import BucketInfo, WindowedCounter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CircuitBreaker:
    config: BreakerConfig = field(default_factory=BreakerConfig)
    clock: Clock = monotonic
    _counter: WindowedCounter = field(init=False, repr=False)
    _state: State = field(init=False, default=State.CLOSED)
    _opened_at: float | None = field(init=False, default=None)
    _trial_success: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self._counter = WindowedCounter(
            capacity=self.config.capacity,
            span_sec=self.config.span_sec,
            origin=self.clock(),
        )

    @property
    def counter(self) -> WindowedCounter:
        return self._counter

    @property
    def opened_at(self) -> float | None:
        return self._opened_at

    @property
    def trial_success(self) -> int:
        return self._trial_success

    def configuration(self) -> BreakerConfig:
        return self.config

    def current_state(self, now: float | None = None) -> State:
        self._evaluate(self._now(now))
        return self._state

    def allow_request(self, now: float | None = None) -> bool:
        return self.current_state(now) is not State.OPEN

    def error_rate(self) -> float:
        return self._counter.error_rate(self.config.min_eval_size)

    def inspect_bucket(self, index: int) -> BucketInfo:
        return self._counter.inspect_bucket(index)

    def retry_remaining(self, now: float | None = None) -> float:
        if self._state is not State.OPEN or self._opened_at is None:
            return 0.0
        elapsed = self._now(now) - self._opened_at
        return max(0.0, self.config.retry_timeout_sec - elapsed)

    def report_outcome(self, success: bool, now: float | None = None) -> None:
        now = self._now(now)
        self._evaluate(now)
        if self._state is State.OPEN:
            return
        if self._state is State.HALF_OPEN:
            if success:
                self._trial_success += 1
                self._evaluate(now)
            else:
                self._open(now)
            return
        if success:
            self._counter.record_success(now)
        else:
            self._counter.record_failure(now)
            self._evaluate(now)

    def record_success(self, now: float | None = None) -> None:
        self.report_outcome(True, now)

    def record_failure(self, now: float | None = None) -> None:
        self.report_outcome(False, now)

    def _now(self, now: float | None) -> float:
        return self.clock() if now is None else now

    def _evaluate(self, now: float) -> None:
        if self._state is State.CLOSED:
            self._counter.advance(now)
            rate = self.error_rate()
            if rate > self.config.error_threshold:
                logger.info(
                    "Error rate %.2f%% above threshold %.2f%%",
                    rate,
                    self.config.error_threshold,
                )
                self._open(now)
        elif self._state is State.OPEN:
            if self._opened_at is not None and now - self._opened_at >= self.config.retry_timeout_sec:
                self._transition(State.HALF_OPEN)
                self._opened_at = None
        elif self._trial_success >= self.config.trial_success_required:
            self._trial_success = 0
            self._counter.reset(now)
            self._transition(State.CLOSED)

    def _open(self, now: float) -> None:
        self._trial_success = 0
        self._opened_at = now
        self._transition(State.OPEN)

    def _transition(self, state: State) -> None:
        logger.info("Circuit %s -> %s", self._state.value, state.value)
        self._state = state
