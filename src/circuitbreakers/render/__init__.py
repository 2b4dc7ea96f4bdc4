from __future__ import annotations

from circuitbreakers.render.ascii import render, strip_ansi
from circuitbreakers.render.layout import EMPTY, RingLayout, ring_layout

__all__ = ["EMPTY", "RingLayout", "render", "ring_layout", "strip_ansi"]
