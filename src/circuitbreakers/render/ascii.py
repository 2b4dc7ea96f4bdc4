"""Terminal rendering of a breaker and its window.

The picture is assembled as scanlines, one list entry per output row, and
joined at the end. Only read-only breaker accessors are used, apart from
``current_state`` which reconciles pending time-based transitions.
"""

from __future__ import annotations

import re

from circuitbreakers.breaker import CircuitBreaker, State
from circuitbreakers.render.layout import EMPTY, RingLayout, ring_layout

RESET = "\x1b[0m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
BG_RED = "\x1b[41m"
BG_GREEN = "\x1b[42m"
BG_YELLOW = "\x1b[43m"

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

# Box counters are three digits wide.
MAX_SHOWN_COUNT = 999

_PAD = " " * 9
_GAP = " " * 23
_LEFT_COL = _PAD + "│" + " " * 32
_CONNECT_DOWN = [_PAD + "▲" + " " * 41 + "│", _PAD + "│" + " " * 41 + "▼"]
_CONNECT_LOOP = [_PAD + "▲" + " " * 41 + "│", _PAD + "└" + "─" * 41 + "┘"]
_CONNECT_SIDES = [_PAD + "│" + " " * 41 + "│", _PAD + "│" + " " * 41 + "▼"]

_SERVICE_BOX = [
    " " * 23 + "┌─────────────┐",
    " " * 23 + "│   Service   │",
    " " * 23 + "└─────────────┘",
]


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def render(
    breaker: CircuitBreaker,
    now: float | None = None,
    last_event: bool | None = None,
    color: bool = True,
) -> str:
    """Draw the breaker, its status line and the bucket ring.

    ``last_event`` is the most recent outcome shown on the arrow between the
    service and the ring: True for a success, False for a failure, None when
    nothing was reported recently.
    """
    now = breaker.clock() if now is None else now
    state = breaker.current_state(now)
    lines = [""] + _SERVICE_BOX
    lines += _event_arrow(state, last_event)
    lines.append(" " * 25 + f"Status: {_status(state)}")
    lines.append(" " * 21 + f"Error Rate: {breaker.error_rate():.2f}%")
    lines.append(_indicator(breaker, state, now))
    lines += _ring(breaker, ring_layout(breaker.counter.capacity))
    text = "\n".join(lines)
    return text if color else strip_ansi(text)


def _status(state: State) -> str:
    if state is State.OPEN:
        return f"{BG_RED} Open {RESET}"
    if state is State.HALF_OPEN:
        return f"{BG_YELLOW} Half Open {RESET}"
    return "Closed"


def _gate(state: State) -> str:
    if state is State.OPEN:
        return f"{RESET}─"
    if state is State.HALF_OPEN:
        return "/"
    return "│"


def _event_arrow(state: State, last_event: bool | None) -> list[str]:
    if last_event is None:
        colour, label = RESET, "   │"
    elif last_event:
        colour, label = GREEN, "Success"
    else:
        colour, label = RED, "Failure"
    pad = " " * 30
    rows = [
        f"{pad}{colour}│{RESET}",
        f"{' ' * 27}{colour}{label}{RESET}",
        f"{pad}{colour}│{RESET}",
        f"{pad}{colour}{_gate(state)}{RESET}",
    ]
    if state is State.OPEN:
        # Nothing flows past an open gate.
        rows += [f"{pad}│", f"{pad}▼"]
    else:
        rows += [f"{pad}{colour}│{RESET}", f"{pad}{colour}▼{RESET}"]
    return rows


def _indicator(breaker: CircuitBreaker, state: State, now: float) -> str:
    if state is State.OPEN:
        return " " * 26 + f"Retry: {breaker.retry_remaining(now):.1f}s"
    if state is State.HALF_OPEN:
        required = breaker.configuration().trial_success_required
        return " " * 20 + f"Trial Success: {breaker.trial_success}/{required}"
    return " " * 20 + f"Next Bucket: {breaker.counter.span_remaining(now):.1f}s"


def _box(breaker: CircuitBreaker, index: int) -> list[str]:
    info = breaker.inspect_bucket(index)
    if breaker.counter.cursor == index:
        edge, top, bottom = "┃", "┏" + "━" * 17 + "┓", "┗" + "━" * 17 + "┛"
    else:
        edge, top, bottom = "│", "┌" + "─" * 17 + "┐", "└" + "─" * 17 + "┘"
    middle = (
        f"{edge} B{index:<2d} {BG_GREEN} {min(info.success_count, MAX_SHOWN_COUNT):03d} {RESET} "
        f"{BG_RED} {min(info.failure_count, MAX_SHOWN_COUNT):03d} {RESET} {edge}"
    )
    return [top, middle, bottom]


def _ring(breaker: CircuitBreaker, layout: RingLayout) -> list[str]:
    top = ["", "", ""]
    for position, index in enumerate(layout.top):
        if index == EMPTY and position == 1:
            top[1] += "─" * 32 + "┐"
            top[2] += " " * 32 + "│"
            break
        if index == EMPTY and position == 2:
            top[1] += "─" * 11 + "┐"
            top[2] += " " * 11 + "│"
            break
        if position > 0:
            top[0] += "  "
            top[1] += "─▶"
            top[2] += "  "
        for row, text in enumerate(_box(breaker, index)):
            top[row] += text

    if not (layout.right or layout.bottom):
        return top + _CONNECT_LOOP

    middle = list(_CONNECT_DOWN)
    for left_index, right_index in zip(layout.left, layout.right):
        if left_index == EMPTY:
            left_rows = [_LEFT_COL] * 3
        else:
            left_rows = [text + _GAP for text in _box(breaker, left_index)]
        right_rows = _box(breaker, right_index)
        middle += [left + right for left, right in zip(left_rows, right_rows)]
        middle += _CONNECT_SIDES

    bottom = ["", "", ""]
    for position, index in enumerate(layout.bottom):
        if index == EMPTY and position == 0:
            bottom[0] += _PAD + "│" + " " * 11
            bottom[1] += _PAD + "└" + "─" * 11
            bottom[2] += " " * 21
            continue
        if index == EMPTY and position == 1:
            bottom[0] += " " * 21
            bottom[1] += "─" * 21
            bottom[2] += " " * 21
            continue
        for row, text in enumerate(_box(breaker, index)):
            bottom[row] += text
        if position < len(layout.bottom) - 1:
            bottom[0] += "  "
            bottom[1] += "◀─"
            bottom[2] += "  "
    return top + middle + bottom
