from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List

import dash
from dash import ALL, Input, Output

from subsidy_browser.core.explorer_state import ExplorerState
from subsidy_browser.ui.callbacks.callbacks_utils import state_fits_config, try_parse_explorer_state
from subsidy_browser.ui.figures import message_figure, view_figure
from subsidy_browser.ui.helpers import (
    results_count_text,
    sort_button_label,
    table_columns,
    table_rows,
    truncation_message,
)
from subsidy_browser.ui.ids import IDs

if TYPE_CHECKING:
    from subsidy_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _sort_button_ids() -> List[str]:
    """Field names of the sort buttons currently in the layout."""
    # outputs_list order matches the Output declarations below
    return [o["id"]["index"] for o in dash.ctx.outputs_list[6]]


def _sort_button_styles(ctx: AppConfig, state: ExplorerState, keys: List[str]):
    cfg = ctx.cfg_by_name[state.dataset_name]
    labels, colours = [], []
    for key in keys:
        try:
            field = cfg.field(key)
        except KeyError:
            # Stale button from the previous dataset, about to be replaced
            labels.append(dash.no_update)
            colours.append(dash.no_update)
            continue
        labels.append(sort_button_label(field, state))
        colours.append("success" if key == state.sort_key else "light")
    return labels, colours


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # ExplorerState -> table, counts, sort buttons, chart
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.TABLE_TITLE, "children"),
        Output(IDs.Control.RESULTS_TABLE, "columns"),
        Output(IDs.Control.RESULTS_TABLE, "data"),
        Output(IDs.Control.RESULTS_COUNT, "children"),
        Output(IDs.Control.TRUNCATION_MESSAGE, "children"),
        Output(IDs.Control.MAIN_GRAPH, "figure"),
        Output({"type": IDs.Pattern.SORT_BUTTON, "index": ALL}, "children"),
        Output({"type": IDs.Pattern.SORT_BUTTON, "index": ALL}, "color"),
        Input(IDs.Store.EXPLORER_STATE, "data"),
    )
    def render_explorer(state_data: dict[str, Any] | None):
        keys = _sort_button_ids()
        untouched = [dash.no_update] * len(keys)

        state = try_parse_explorer_state(state_data)
        cfg = ctx.cfg_by_name.get(state.dataset_name) if state else None
        if state is None or cfg is None or not state_fits_config(state, cfg):
            return (
                "No dataset selected",
                [],
                [],
                "",
                "",
                message_figure("No dataset selected.", "Choose a dataset from the navbar."),
                untouched,
                untouched,
            )

        ds = ctx.dataset_by_name.get(cfg.name)
        if ds is None:
            return (
                cfg.title,
                [],
                [],
                "",
                "",
                message_figure(
                    f"The data for '{cfg.title}' is not available.",
                    "Check the data file named in its config; see the logs for details.",
                ),
                untouched,
                untouched,
            )

        view = ds.view(state, ctx.limit_for(cfg.name))

        logger.info(
            "render_explorer",
            extra={
                "dataset": cfg.name,
                "query": state.query,
                "category": state.category,
                "sort_key": state.sort_key,
                "sort_dir": state.sort_dir,
                "total_count": view.total_count,
            },
        )

        labels, colours = _sort_button_styles(ctx, state, keys)

        return (
            cfg.title,
            table_columns(cfg, state),
            table_rows(view, cfg),
            results_count_text(view, cfg),
            truncation_message(view),
            view_figure(view, cfg, state),
            labels,
            colours,
        )
