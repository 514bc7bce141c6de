from __future__ import annotations

import dash_bootstrap_components as dbc

from dash import dcc, html

from subsidy_browser.ui.ids import IDs


def build_plot_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Chart"),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dcc.Loading(
                        id="main-graph-loading",
                        type="default",
                        children=dcc.Graph(
                            id=IDs.Control.MAIN_GRAPH,
                            config={"responsive": True},
                        ),
                    ),
                ],
            ),
        ],
        className="mt-3",
    )
