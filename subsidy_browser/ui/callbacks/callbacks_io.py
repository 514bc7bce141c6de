from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, dcc, exceptions

from subsidy_browser.formatting import slugify
from subsidy_browser.ui.callbacks.callbacks_utils import state_fits_config, try_parse_explorer_state
from subsidy_browser.ui.helpers import view_frame
from subsidy_browser.ui.ids import IDs

if TYPE_CHECKING:
    from subsidy_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_io_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Export: full filtered + sorted result, not the truncated table
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_DATA, "data"),
        Input(IDs.Control.DOWNLOAD_DATA_BTN, "n_clicks"),
        State(IDs.Store.EXPLORER_STATE, "data"),
        prevent_initial_call=True,
    )
    def download_current_data(n_clicks, state_data):
        if not n_clicks or not state_data:
            raise exceptions.PreventUpdate

        state = try_parse_explorer_state(state_data)
        cfg = ctx.cfg_by_name.get(state.dataset_name) if state else None
        if cfg is None or not state_fits_config(state, cfg):
            raise exceptions.PreventUpdate

        ds = ctx.dataset_by_name.get(cfg.name)
        if ds is None:
            raise exceptions.PreventUpdate

        view = ds.view(state, ctx.limit_for(cfg.name))
        frame = view_frame(view, cfg)

        logger.info("Exporting view", extra={"dataset": cfg.name, "n_rows": len(frame)})

        filename = f"{slugify(cfg.name)}.csv"
        return dcc.send_data_frame(frame.to_csv, filename, index=False)
