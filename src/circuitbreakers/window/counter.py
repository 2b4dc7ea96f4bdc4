"""Time-partitioned success/failure counter backing the breaker's error rate.

The window is a fixed ring of ``capacity`` buckets, each covering ``span_sec``
seconds. The cursor position is derived from the absolute number of spans
elapsed since ``origin``, so repeated calls with the same ``now`` always land
on the same bucket and never evict twice.

The bucket under the cursor is still filling up and is left out of the error
rate; only completed spans are evaluated.
"""

from __future__ import annotations

import logging
import math

from circuitbreakers.window.models import Bucket, BucketInfo

logger = logging.getLogger(__name__)


def _to_ns(seconds: float) -> int:
    # Integer nanoseconds, so 0.3s over 0.1s spans is span 3, not 2.
    return round(seconds * 1_000_000_000)


class WindowedCounter:
    def __init__(self, capacity: int, span_sec: float, origin: float = 0.0) -> None:
        if capacity < 1:
            msg = f"capacity must be at least 1, got {capacity}"
            raise ValueError(msg)
        if _to_ns(span_sec) < 1:
            msg = f"span_sec must be at least 1ns, got {span_sec}"
            raise ValueError(msg)
        self._buckets = [Bucket() for _ in range(capacity)]
        self._span_sec = span_sec
        self._span_ns = _to_ns(span_sec)
        self._origin = origin
        self._cursor = 0
        self._span_index = 0

    @property
    def capacity(self) -> int:
        return len(self._buckets)

    @property
    def span_sec(self) -> float:
        return self._span_sec

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def origin(self) -> float:
        return self._origin

    def advance(self, now: float) -> int:
        """Move the cursor to the span containing ``now``.

        Every bucket the cursor passes over or lands on is zeroed. Returns the
        number of spans moved, which is 0 when ``now`` is still inside the
        current span (or earlier than it).
        """
        target = _to_ns(now - self._origin) // self._span_ns
        steps = target - self._span_index
        if steps <= 0:
            return 0
        size = len(self._buckets)
        if steps >= size:
            for bucket in self._buckets:
                bucket.reset()
        else:
            for offset in range(1, steps + 1):
                self._buckets[(self._cursor + offset) % size].reset()
        previous = self._cursor
        self._cursor = (self._cursor + steps) % size
        self._span_index = target
        logger.debug("Window advanced %d span(s): cursor %d -> %d", steps, previous, self._cursor)
        return steps

    def record_success(self, now: float) -> None:
        self.advance(now)
        self._buckets[self._cursor].success_count += 1

    def record_failure(self, now: float) -> None:
        self.advance(now)
        self._buckets[self._cursor].failure_count += 1

    def error_rate(self, min_eval_size: int) -> float:
        """Failure percentage over completed buckets, rounded to 2 decimals.

        Returns 0.0 when fewer than ``min_eval_size`` (or zero) observations
        sit outside the current bucket.
        """
        failures = 0
        total = 0
        for index, bucket in enumerate(self._buckets):
            if index == self._cursor:
                continue
            failures += bucket.failure_count
            total += bucket.total
        if total == 0 or total < min_eval_size:
            return 0.0
        # Halves round up, never to even.
        return math.floor(failures * 10_000 / total + 0.5) / 100

    def reset(self, now: float | None = None) -> None:
        for bucket in self._buckets:
            bucket.reset()
        self._cursor = 0
        self._span_index = 0
        if now is not None:
            self._origin = now

    def inspect_bucket(self, index: int) -> BucketInfo:
        if index < 0 or index >= len(self._buckets):
            msg = f"bucket index {index} out of range for capacity {len(self._buckets)}"
            raise IndexError(msg)
        return self._buckets[index].info()

    def buckets(self) -> tuple[BucketInfo, ...]:
        return tuple(bucket.info() for bucket in self._buckets)

    def span_elapsed(self, now: float) -> float:
        elapsed = now - self._origin - self._span_index * self._span_sec
        return min(max(0.0, elapsed), self._span_sec)

    def span_remaining(self, now: float) -> float:
        return self._span_sec - self.span_elapsed(now)
