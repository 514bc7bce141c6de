from __future__ import annotations

from typing import Optional

import plotly.graph_objs as go

from subsidy_browser.core.configs import DatasetConfig, FieldSpec
from subsidy_browser.core.explorer import ExplorerView, numeric_value, text_value
from subsidy_browser.core.explorer_state import ExplorerState
from subsidy_browser.formatting import FORMATTERS

CHART_TOP_N = 20
BAR_COLOUR = "#15803d"


def message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    """Standardised 'no data' figure."""
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def chart_metric(cfg: DatasetConfig, state: ExplorerState) -> Optional[FieldSpec]:
    """
    Numeric field to chart: the active sort key when it is numeric, else the
    default sort key, else the first numeric field.
    """
    for name in (state.sort_key, cfg.default_sort.key):
        field = cfg.field(name)
        if field.is_numeric:
            return field
    return next((f for f in cfg.fields if f.is_numeric), None)


def chart_label_field(cfg: DatasetConfig) -> FieldSpec:
    return next((f for f in cfg.fields if not f.is_numeric), cfg.fields[0])


def view_figure(view: ExplorerView, cfg: DatasetConfig, state: ExplorerState) -> go.Figure:
    """
    Horizontal bar chart of the first CHART_TOP_N rows of the current view.
    Bars follow view order, top to bottom.
    """
    if view.total_count == 0:
        return message_figure("No matches.", "Clear the search or category filter to see results.")

    metric = chart_metric(cfg, state)
    if metric is None:
        return message_figure("Nothing to chart for this dataset.")

    label_field = chart_label_field(cfg)
    label_fmt = FORMATTERS[label_field.format]
    value_fmt = FORMATTERS[metric.format]

    top = view.rows[:CHART_TOP_N]
    # Rank prefix keeps bars with identical names on separate rows
    labels = [f"{i}. {label_fmt(text_value(r, label_field))}" for i, r in enumerate(top, start=1)]
    values = [numeric_value(r, metric.name) for r in top]

    fig = go.Figure(
        go.Bar(
            x=values,
            y=labels,
            orientation="h",
            marker_color=BAR_COLOUR,
            text=[value_fmt(v) for v in values],
            textposition="auto",
            hovertemplate="%{y}: %{text}<extra></extra>",
        )
    )
    fig.update_yaxes(autorange="reversed", automargin=True)
    fig.update_xaxes(title_text=metric.label)
    fig.update_layout(
        height=max(300, 28 * len(top) + 120),
        margin=dict(l=40, r=40, t=60, b=40),
        title=f"Top {len(top)} {cfg.noun} by {metric.label}",
        showlegend=False,
    )
    return fig
