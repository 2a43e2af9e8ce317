"""Plotly price chart with fair market value overlays."""

import plotly.graph_objects as go

from card_price_tracker.indicators import FmvResult


PRICE_COLOR = "#3b82f6"
FMV_COLOR = "#10b981"
REFERENCE_COLOR = "#f59e0b"


def build_price_figure(result: FmvResult, height: int = 400) -> go.Figure:
    """Market price, rolling FMV and the flat reference FMV on one chart."""
    chart = result.chart
    x = list(range(len(chart.labels)))

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=x, y=chart.prices,
        mode="lines", line=dict(color=PRICE_COLOR, width=2),
        name="Market Price",
        customdata=chart.labels,
        hovertemplate="%{customdata}<br>Price: %{y:.2f}<extra></extra>",
    ))

    fig.add_trace(go.Scatter(
        x=x, y=chart.fmv,
        mode="lines", line=dict(color=FMV_COLOR, width=2, dash="dash"),
        name="Fair Market Value (Rolling Window)",
        hovertemplate="FMV: %{y:.2f}<extra></extra>",
    ))

    if chart.fmv_line:
        fig.add_trace(go.Scatter(
            x=[x[0], x[-1]], y=[point[1] for point in chart.fmv_line],
            mode="lines+markers",
            line=dict(color=REFERENCE_COLOR, width=2, dash="dot"),
            marker=dict(size=8),
            name=f"Fair Market Value ({result.reference_fmv:.2f})",
            hoverinfo="skip",
        ))

    # Category labels repeat when several trades share a day, so plot by
    # position and label the ticks
    step = max(1, len(x) // 10)
    fig.update_layout(
        height=height, margin=dict(l=0, r=0, t=40, b=0),
        title=dict(
            text=f"Card {result.card.card_id} - Season {result.card.season}",
            font=dict(size=14),
            x=0,
        ),
        xaxis=dict(
            title="Date",
            tickmode="array",
            tickvals=x[::step],
            ticktext=chart.labels[::step],
        ),
        yaxis=dict(title="Price"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        hovermode="x unified",
    )
    return fig
