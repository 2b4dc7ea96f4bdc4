from __future__ import annotations

import pandas as pd

from circuitbreakers.breaker import CircuitBreaker

COLUMNS = ["index", "success_count", "failure_count", "total", "current"]


def buckets_frame(breaker: CircuitBreaker) -> pd.DataFrame:
    cursor = breaker.counter.cursor
    rows = [
        {
            "index": index,
            "success_count": info.success_count,
            "failure_count": info.failure_count,
            "total": info.total,
            "current": index == cursor,
        }
        for index, info in enumerate(breaker.counter.buckets())
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def ordered_buckets_frame(breaker: CircuitBreaker) -> pd.DataFrame:
    """Buckets from oldest to newest, ending with the current one.

    ``age`` counts spans back from the current bucket (0 is current). Buckets
    that were evicted while skipping idle spans show up as zero rows.
    """
    frame = buckets_frame(breaker)
    capacity = len(frame)
    cursor = breaker.counter.cursor
    frame["age"] = (cursor - frame["index"]) % capacity
    return frame.sort_values("age", ascending=False).reset_index(drop=True)
