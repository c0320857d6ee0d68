from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from .amortization import AmortizationResult


def breakdown_bars(schedule_df: pd.DataFrame, title: str = "Principal vs interest per payment") -> go.Figure:
    """Stacked 100% bars: principal and interest share of each installment."""
    fig = go.Figure()
    fig.add_bar(
        x=schedule_df["month"],
        y=schedule_df["principal_percentage"],
        name="Principal",
        marker_color="#15803d",
    )
    fig.add_bar(
        x=schedule_df["month"],
        y=schedule_df["interest_percentage"],
        name="Interest",
        marker_color="#1d4ed8",
    )
    fig.update_layout(barmode="stack", title=title, xaxis_title="Month", yaxis_title="%")
    fig.update_yaxes(range=[0, 100])
    return fig


def balance_curve(schedule_df: pd.DataFrame, title: str = "Remaining balance") -> go.Figure:
    fig = go.Figure(
        go.Scatter(x=schedule_df["month"], y=schedule_df["remaining_balance"], mode="lines", name="Balance")
    )
    fig.update_layout(title=title, xaxis_title="Month", yaxis_title="Amount")
    return fig


def payment_split_pie(result: AmortizationResult, principal: float, title: str = "Total payment") -> go.Figure:
    fig = go.Figure(
        go.Pie(
            labels=["Principal", "Total interest"],
            values=[principal, result.total_interest],
            hole=0.4,
        )
    )
    fig.update_layout(title=title)
    return fig
