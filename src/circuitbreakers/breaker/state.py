from __future__ import annotations

from enum import Enum


class State(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()
