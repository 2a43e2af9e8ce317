"""Streamlit dashboard for card prices and fair market value.

Run with: streamlit run card_price_tracker/ui/dashboard.py
"""

import streamlit as st
import pandas as pd

from card_price_tracker.config import Settings, TrackerSettings
from card_price_tracker.data.parsers import parse_card_ref
from card_price_tracker.data.store import SettingsStore
from card_price_tracker.data.trades_fetcher import TradesFetcher
from card_price_tracker.indicators import FmvResult
from card_price_tracker.models import CardInfo
from card_price_tracker.pipeline import TrackerSession
from card_price_tracker.ui.chart import build_price_figure


def get_session(card: CardInfo, settings: Settings) -> TrackerSession:
    """One session per card, kept across Streamlit reruns."""
    session = st.session_state.get("tracker_session")
    if session is None or session.card != card:
        fetcher = st.session_state.get("fetcher")
        if fetcher is None:
            fetcher = TradesFetcher(settings)
            st.session_state["fetcher"] = fetcher
        session = TrackerSession(card, fetcher, SettingsStore(settings.db_path))
        st.session_state["tracker_session"] = session
    return session


def render_summary(result: FmvResult) -> None:
    """Headline metrics for the latest trade."""
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Trades", result.trade_count)
    col2.metric("Latest Price", "N/A" if result.latest_price is None else f"{result.latest_price:.2f}")
    col3.metric("Rolling FMV", "N/A" if result.latest_fmv is None else f"{result.latest_fmv:.2f}")
    col4.metric("Reference FMV", f"{result.reference_fmv:.2f}")


def render_trade_table(result: FmvResult) -> None:
    """Most recent trades first, with their FMV and premium over it."""
    if result.history.empty:
        return
    table = result.history.iloc[::-1].copy()
    table["premium_pct"] = (table["price"] / table["fmv"] - 1) * 100
    table.index = pd.to_datetime(table.index).strftime("%Y-%m-%d %H:%M")
    st.dataframe(
        table.rename(columns={"price": "Price", "fmv": "FMV", "premium_pct": "vs FMV (%)"}),
        use_container_width=True,
    )


def main() -> None:
    """Main dashboard entry point."""
    st.set_page_config(page_title="Card Price Tracker", page_icon="", layout="wide")
    st.title("Card Price Tracker")

    try:
        settings = Settings()
        settings.validate()
    except ValueError as e:
        st.error(str(e))
        return

    col_card, col_season = st.columns([3, 1])
    with col_card:
        card_ref = st.text_input("Card ID or card page URL", value="")
    with col_season:
        season = st.text_input("Season", value=settings.current_season)

    if not card_ref:
        st.info("Enter a card to chart its trades.")
        return

    try:
        card = parse_card_ref(card_ref, season or settings.current_season)
    except ValueError as e:
        st.error(str(e))
        return

    session = get_session(card, settings)
    saved = TrackerSettings.load(session.store)

    col_limit, col_threshold, col_refresh = st.columns([1, 1, 3])
    with col_limit:
        trade_limit = st.number_input(
            "Trades to Show", min_value=1, value=saved.trade_limit, step=1
        )
    with col_threshold:
        threshold = st.number_input(
            "Outlier Threshold", min_value=0.0, value=float(saved.outlier_threshold), step=0.1
        )
    with col_refresh:
        refresh_clicked = st.button("Refresh")

    with st.spinner("Loading trades..."):
        if trade_limit != session.settings.trade_limit:
            session.set_trade_limit(trade_limit)
        elif threshold != session.settings.outlier_threshold:
            session.set_outlier_threshold(threshold)
        elif session.latest is None or refresh_clicked:
            session.refresh()

    result = session.latest
    if result is None:
        st.error("Could not load trades for this card. Check the logs for details.")
        return

    render_summary(result)
    st.plotly_chart(build_price_figure(result), use_container_width=True, config={"displayModeBar": False})
    render_trade_table(result)


if __name__ == "__main__":
    main()
