"""Streamlit dashboard for the FCT mint-rate forecast."""

from __future__ import annotations

from pathlib import Path

import streamlit as st

from fctcast.config import Config, load_config
from fctcast.engine.orchestrator import orchestrator_from_config
from fctcast.engine.session import ForecastSession
from fctcast.engine.state import ForecastRun
from fctcast.reporting.summary import format_forecast, samples_frame
from fctcast.utils.logging import get_logger

DATA_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG = DATA_ROOT / "configs" / "facet.yaml"
SESSION_KEY = "fctcast_session"

logger = get_logger(__name__)


def _load_config() -> Config:
    return load_config(DEFAULT_CONFIG if DEFAULT_CONFIG.exists() else None)


def _session(cfg: Config) -> ForecastSession:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = ForecastSession(orchestrator_from_config(cfg))
    return st.session_state[SESSION_KEY]


def _display_run(run: ForecastRun) -> None:
    result = run.result
    rate_col, period_col, issuance_col = st.columns(3)
    rate_col.metric("Current mint rate (gwei)", f"{result.current_rate:,}")
    rate_col.metric(
        "Forecasted mint rate (gwei)",
        f"{result.forecasted_rate:,}",
        delta=f"{result.percent_change:.1f}%",
    )
    period_col.metric("Adjustment period", f"{result.period.index}", delta=f"{result.percent_complete:.1f}% complete", delta_color="off")
    period_col.metric("Blocks remaining", f"{result.blocks_remaining:,}")
    issuance_col.metric("FCT minted so far", f"{result.issuance_so_far:,}")
    issuance_col.metric(
        "Forecasted issuance",
        f"{result.projected_issuance:,}",
        delta=f"{result.target_completion_percent:.1f}% of target",
        delta_color="off",
    )

    if run.samples:
        st.subheader("Issuance this period")
        frame = samples_frame(run.samples)
        st.line_chart(frame.set_index("height")["minted"], use_container_width=True)
        st.caption("Sample times are back-dated from now with an assumed block time and are approximate.")
        if run.failures:
            st.warning(f"{len(run.failures)} historical sample(s) could not be read and were skipped.")
        csv_bytes = frame.to_csv(index=False).encode("utf-8")
        st.download_button("Download samples CSV", data=csv_bytes, file_name="fct_issuance_samples.csv", mime="text/csv")

    st.subheader("Details")
    st.code(format_forecast(result), language=None)


def main() -> None:
    st.set_page_config(page_title="ForeCasT", layout="wide")
    st.title("ForeCasT")
    st.markdown("Forecast of the next FCT mint-rate adjustment from live Facet chain state.")

    cfg = _load_config()
    session = _session(cfg)
    include_history = st.sidebar.checkbox("Reconstruct period history", value=cfg.history.enabled)

    clicked = st.button("Refresh Forecast")
    first_load = session.last_run is None and session.last_error is None
    if clicked or first_load:
        with st.spinner("Fetching chain state..."):
            session.refresh(include_history=include_history)
        if session.failed:
            logger.error("Forecast refresh failed: %s", session.last_error)

    if session.failed:
        st.error(f"Error calculating adjustment prediction: {session.last_error}")
    if session.last_run is not None:
        _display_run(session.last_run)


if __name__ == "__main__":
    main()
