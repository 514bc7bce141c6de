from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from subsidy_browser.ui.ids import IDs
from subsidy_browser.ui.layout.build_filter_panel import build_filter_panel
from subsidy_browser.ui.layout.build_navbar import build_navbar
from subsidy_browser.ui.layout.build_plot_panel import build_plot_panel
from subsidy_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from subsidy_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    dataset_cfgs = [ctx.cfg_by_name[n] for n in ctx.dataset_names]
    default_cfg = ctx.cfg_by_name.get(ctx.default_dataset_name) if ctx.default_dataset_name else None

    navbar = build_navbar(dataset_cfgs, ctx.global_config, ctx.default_dataset_name)
    filter_panel = build_filter_panel(default_cfg, ctx.global_config.search_debounce_ms)

    return dbc.Container(
        fluid=True,
        children=[
            navbar,

            # Explorer state lives only for the page session
            dcc.Store(id=IDs.Store.EXPLORER_STATE, storage_type="memory"),

            dbc.Row(
                [
                    dbc.Col(
                        filter_panel,
                        md=3,
                        className="mt-3",
                    ),
                    dbc.Col(
                        [
                            build_table_panel(),
                            build_plot_panel(),
                        ],
                        md=9,
                        className="mt-3",
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
