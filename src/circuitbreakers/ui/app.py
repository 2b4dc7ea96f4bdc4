from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from circuitbreakers.breaker import CircuitBreaker, State
from circuitbreakers.config import BreakerConfig
from circuitbreakers.render import render
from circuitbreakers.ui.frames import ordered_buckets_frame


st.set_page_config(page_title="Circuit Breaker", layout="wide")


def _render_header() -> None:
    st.title("Circuit Breaker")
    st.caption("Report outcomes and watch the rolling window decide when to trip.")


def _build_config() -> BreakerConfig:
    with st.sidebar:
        st.header("Breaker Configuration")
        capacity = st.slider("Buckets", 1, 20, 5)
        span = st.number_input("Bucket span (sec)", min_value=0.1, value=5.0)
        min_eval = st.number_input("Min eval size", min_value=0, value=10)
        threshold = st.slider("Error threshold %", 0.0, 100.0, 40.0)
        retry = st.number_input("Retry timeout (sec)", min_value=0.0, value=10.0)
        trials = st.number_input("Trial successes required", min_value=0, value=3)
    return BreakerConfig(
        capacity=int(capacity),
        span_sec=float(span),
        min_eval_size=int(min_eval),
        error_threshold=float(threshold),
        retry_timeout_sec=float(retry),
        trial_success_required=int(trials),
    )


def _breaker(config: BreakerConfig) -> CircuitBreaker:
    breaker = st.session_state.get("breaker")
    if breaker is None or breaker.configuration() != config:
        breaker = CircuitBreaker(config)
        st.session_state["breaker"] = breaker
        st.session_state["last_event"] = None
    return breaker


def _outcome_buttons(breaker: CircuitBreaker) -> None:
    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Success"):
            breaker.record_success()
            st.session_state["last_event"] = True
    with col2:
        if st.button("Failure"):
            breaker.record_failure()
            st.session_state["last_event"] = False
    with col3:
        if st.button("Refresh"):
            st.session_state["last_event"] = None


def _plot_buckets(buckets: pd.DataFrame) -> go.Figure:
    labels = [f"B{i}{'*' if cur else ''}" for i, cur in zip(buckets["index"], buckets["current"])]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=buckets["success_count"], name="Successes", marker_color="seagreen"))
    fig.add_trace(go.Bar(x=labels, y=buckets["failure_count"], name="Failures", marker_color="indianred"))
    fig.update_layout(
        barmode="stack",
        height=300,
        margin=dict(l=10, r=10, t=30, b=10),
        title="Buckets, oldest to current (*)",
    )
    return fig


def _render_status(breaker: CircuitBreaker) -> None:
    state = breaker.current_state()
    col1, col2, col3 = st.columns(3)
    col1.metric("State", state.label)
    col2.metric("Error rate", f"{breaker.error_rate():.2f}%")
    if state is State.OPEN:
        col3.metric("Retry in", f"{breaker.retry_remaining():.1f}s")
    elif state is State.HALF_OPEN:
        required = breaker.configuration().trial_success_required
        col3.metric("Trial successes", f"{breaker.trial_success}/{required}")
    else:
        col3.metric("Next bucket in", f"{breaker.counter.span_remaining(breaker.clock()):.1f}s")
    if state is State.OPEN:
        st.error("Circuit open: calls are being short-circuited")


def main() -> None:
    _render_header()
    config = _build_config()
    breaker = _breaker(config)
    _outcome_buttons(breaker)
    _render_status(breaker)
    st.plotly_chart(_plot_buckets(ordered_buckets_frame(breaker)), use_container_width=True)
    with st.expander("Terminal view"):
        st.code(render(breaker, last_event=st.session_state.get("last_event"), color=False))


if __name__ == "__main__":
    main()
