from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Bucket:
    success_count: int = 0
    failure_count: int = 0

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count

    def reset(self) -> None:
        self.success_count = 0
        self.failure_count = 0

    def info(self) -> "BucketInfo":
        return BucketInfo(success_count=self.success_count, failure_count=self.failure_count)


@dataclass(frozen=True, slots=True)
class BucketInfo:
    success_count: int
    failure_count: int

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count
