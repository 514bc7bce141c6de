from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output

from subsidy_browser.core.explorer_state import ExplorerState
from subsidy_browser.formatting import fmt_count
from subsidy_browser.ui.helpers import get_category_options
from subsidy_browser.ui.ids import IDs
from subsidy_browser.ui.layout.build_filter_panel import build_sort_buttons

if TYPE_CHECKING:
    from subsidy_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

HIDDEN = {"display": "none"}


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Dataset switch: reset inputs and rebuild per-dataset controls
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.SIDEBAR_DATASET_NAME, "children"),
        Output(IDs.Control.SIDEBAR_DATASET_META, "children"),
        Output(IDs.Control.SEARCH_INPUT, "value"),
        Output(IDs.Control.SEARCH_INPUT, "placeholder"),
        Output(IDs.Control.CATEGORY_SELECT, "options"),
        Output(IDs.Control.CATEGORY_SELECT, "value"),
        Output(IDs.Control.CATEGORY_SELECT, "placeholder"),
        Output(IDs.Control.CATEGORY_LABEL, "children"),
        Output(IDs.Control.CATEGORY_FILTER_CONTAINER, "style"),
        Output(IDs.Control.SORT_BUTTONS_CONTAINER, "children"),
        Input(IDs.Control.DATASET_SELECT, "value"),
    )
    def update_filters_for_dataset(dataset_name: str | None):
        cfg = ctx.cfg_by_name.get(dataset_name) if dataset_name else None
        if cfg is None:
            return "No dataset", "", "", "Search...", [], None, "All", "", HIDDEN, []

        ds = ctx.dataset_by_name.get(cfg.name)
        if ds is None:
            meta = "Data file unavailable"
            category_options = []
        else:
            meta = f"{fmt_count(len(ds))} {cfg.noun}"
            category_options = get_category_options(ds)

        category_style = {} if cfg.category_field else HIDDEN
        sort_buttons = build_sort_buttons(cfg, ExplorerState.initial(cfg))

        return (
            cfg.title,
            meta,
            "",
            f"Search {cfg.noun}...",
            category_options,
            None,
            cfg.category_label,
            cfg.category_label,
            category_style,
            sort_buttons,
        )
