from __future__ import annotations

from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from subsidy_browser.core.configs import DatasetConfig
from subsidy_browser.core.explorer_state import ExplorerState
from subsidy_browser.ui.helpers import sort_button_label
from subsidy_browser.ui.ids import IDs, sort_button_id


def build_sort_buttons(cfg: DatasetConfig, state: ExplorerState) -> List[dbc.Button]:
    return [
        dbc.Button(
            sort_button_label(f, state),
            id=sort_button_id(f.name),
            color="success" if f.name == state.sort_key else "light",
            size="sm",
            className="me-1 mb-1",
        )
        for f in cfg.sortable_fields()
    ]


def build_filter_panel(cfg: Optional[DatasetConfig], debounce_ms: int) -> dbc.Card:
    if cfg is None:
        return dbc.Card(
            dbc.CardBody("No datasets configured. Add a dataset config under config/datasets."),
        )

    state = ExplorerState.initial(cfg)
    # dcc.Input takes the debounce delay in seconds; False sends every keystroke
    debounce = debounce_ms / 1000 if debounce_ms else False

    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Div([
                        html.H5(
                            cfg.title,
                            id=IDs.Control.SIDEBAR_DATASET_NAME,
                            className="card-title"
                        ),
                        html.P(
                            "",
                            id=IDs.Control.SIDEBAR_DATASET_META,
                            className="card-subtitle text-muted mb-3"
                        ),
                        html.Hr(),
                    ]),

                    html.Label("Search", className="form-label"),
                    dcc.Input(
                        id=IDs.Control.SEARCH_INPUT,
                        type="text",
                        value="",
                        debounce=debounce,
                        placeholder=f"Search {cfg.noun}...",
                        className="form-control mb-3",
                    ),

                    html.Div(
                        id=IDs.Control.CATEGORY_FILTER_CONTAINER,
                        children=[
                            html.Label(
                                cfg.category_label,
                                id=IDs.Control.CATEGORY_LABEL,
                                className="form-label",
                            ),
                            dcc.Dropdown(
                                id=IDs.Control.CATEGORY_SELECT,
                                options=[],
                                value=None,
                                placeholder=cfg.category_label,
                                className="mb-3",
                            ),
                        ],
                        style={} if cfg.category_field else {"display": "none"},
                    ),

                    html.Label("Sort by", className="form-label"),
                    html.Div(
                        build_sort_buttons(cfg, state),
                        id=IDs.Control.SORT_BUTTONS_CONTAINER,
                        className="d-flex flex-wrap",
                    ),
                ]
            ),
        ],
    )
