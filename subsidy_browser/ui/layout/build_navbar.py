from __future__ import annotations

from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from subsidy_browser.core.configs import DatasetConfig, GlobalConfig
from subsidy_browser.ui.ids import IDs


def build_navbar(
    dataset_cfgs: List[DatasetConfig],
    global_config: GlobalConfig,
    default_name: Optional[str],
) -> dbc.Navbar:
    dataset_options = [{"label": cfg.title, "value": cfg.name} for cfg in dataset_cfgs]

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                # Left: title
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(
                            global_config.subtitle,
                            className="text-muted",
                            id="navbar-subtitle",
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),

                html.Div(
                    [
                        html.Div(
                            "Dataset",
                            className="navbar-dataset-title",
                        ),
                        dcc.Dropdown(
                            id=IDs.Control.DATASET_SELECT,
                            options=dataset_options,
                            value=default_name,
                            clearable=False,
                            placeholder="Select dataset",
                            className="mt-1",
                        ),
                    ],
                    className="ms-auto",
                    style={
                        "minWidth": "280px",
                        "maxWidth": "380px",
                        "marginRight": "24px",
                    },
                ),
            ],
        ),
        dark=False,
        className="shadow-sm",
    )
