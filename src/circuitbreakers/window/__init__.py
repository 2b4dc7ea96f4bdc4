from __future__ import annotations

from circuitbreakers.window.counter import WindowedCounter
from circuitbreakers.window.models import Bucket, BucketInfo

__all__ = ["Bucket", "BucketInfo", "WindowedCounter"]
