"""Plotly visualisation helpers for the expense tracker.

Each function accepts one of the frames built in :mod:`reports` and
returns a `plotly.graph_objects.Figure` that Streamlit renders via
``st.plotly_chart``.  Empty inputs produce an empty figure with a
"No data to display" title instead of raising.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .formatting import format_currency


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_category_pie_chart(spending: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Generate a pie chart of spending per category.

    Parameters
    ----------
    spending : pandas.DataFrame
        Output of :func:`reports.category_spending_frame`, built from
        :func:`analytics.spending_chart_data` so only categories with
        spending appear.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart coloured with each category's catalog colour.
    """
    if spending.empty:
        return _empty_figure()
    fig = px.pie(
        spending,
        names='Category',
        values='Spent',
        color='Category',
        color_discrete_map=dict(zip(spending['Category'], spending['Color'])),
        hole=0.4,
    )
    fig.update_traces(textposition='inside', textinfo='percent+label')
    fig.update_layout(title=title or "Spending by category")
    return fig


def create_budget_bar_chart(spending: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bars of budget against actual spending per category.

    Parameters
    ----------
    spending : pandas.DataFrame
        Output of :func:`reports.category_spending_frame`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Grouped bar chart.
    """
    if spending.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(name='Budget', x=spending['Category'], y=spending['Budget'], marker_color='#1f77b4'))
    fig.add_trace(go.Bar(name='Spent', x=spending['Category'], y=spending['Spent'], marker_color='#ff7f0e'))
    fig.update_layout(title=title or "Budget vs Spent", barmode='group', xaxis_tickangle=-30)
    return fig


def create_yearly_bar_chart(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Bar chart of monthly totals.

    Parameters
    ----------
    breakdown : pandas.DataFrame
        Output of :func:`reports.yearly_breakdown_frame` (``Month`` and
        ``Total`` columns).
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with one bar per month.
    """
    if breakdown.empty:
        return _empty_figure()
    fig = px.bar(
        breakdown,
        x='Month',
        y='Total',
        text=[format_currency(value) for value in breakdown['Total']],
    )
    fig.update_layout(title=title or "Spending by month", xaxis_title="Month", yaxis_title="Total")
    return fig
