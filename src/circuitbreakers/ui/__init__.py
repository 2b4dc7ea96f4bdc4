from __future__ import annotations

from circuitbreakers.ui.frames import buckets_frame, ordered_buckets_frame

__all__ = ["buckets_frame", "ordered_buckets_frame"]
