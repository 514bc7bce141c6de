from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from subsidy_browser.ui.ids import IDs

_FONT = 'system-ui, -apple-system, BlinkMacSystemFont, "SF Pro Text", "Segoe UI", sans-serif'


def build_table_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("", id=IDs.Control.TABLE_TITLE),
                        html.Span("", id=IDs.Control.RESULTS_COUNT, className="text-muted ms-3"),
                        dbc.Button(
                            "Download data (CSV)",
                            id=IDs.Control.DOWNLOAD_DATA_BTN,
                            color="secondary",
                            size="sm",
                            className="ms-auto",
                        ),
                        dcc.Download(id=IDs.Control.DOWNLOAD_DATA),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dcc.Loading(
                        type="default",
                        children=dash_table.DataTable(
                            id=IDs.Control.RESULTS_TABLE,
                            data=[],
                            columns=[],
                            style_table={"overflowX": "auto"},
                            style_as_list_view=True,
                            style_cell={
                                "fontFamily": _FONT,
                                "fontSize": "13px",
                                "padding": "6px 8px",
                                "border": "none",
                                "textAlign": "left",
                                "minWidth": "60px",
                                "maxWidth": "320px",
                                "whiteSpace": "nowrap",
                                "textOverflow": "ellipsis",
                            },
                            style_header={
                                "fontFamily": _FONT,
                                "fontSize": "13px",
                                "fontWeight": "600",
                                "backgroundColor": "#f3f4f6",
                                "borderBottom": "2px solid #15803d",
                            },
                            style_data={
                                "borderBottom": "1px solid #e5e7eb",
                            },
                            # Sorting and truncation happen server-side
                            sort_action="none",
                            filter_action="none",
                            page_action="none",
                        ),
                    ),
                    html.P(
                        "",
                        id=IDs.Control.TRUNCATION_MESSAGE,
                        className="text-muted small mt-3 text-center",
                    ),
                ],
            ),
        ],
    )
