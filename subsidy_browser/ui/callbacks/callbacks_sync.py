from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, List, Optional

import dash
from dash import ALL, Input, Output, State, exceptions

from subsidy_browser.core.exceptions import UnknownSortKeyError
from subsidy_browser.core.explorer_state import ExplorerState
from subsidy_browser.ui.callbacks.callbacks_utils import state_fits_config, try_parse_explorer_state
from subsidy_browser.ui.ids import IDs

if TYPE_CHECKING:
    from subsidy_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _sort_key_from(triggered: List[Any]) -> Optional[str]:
    for tid in triggered:
        if isinstance(tid, dict) and tid.get("type") == IDs.Pattern.SORT_BUTTON:
            return tid.get("index")
    return None


def _build_next_state(
    ctx: AppConfig,
    triggered: List[Any],
    dataset_name: Optional[str],
    query: Optional[str],
    category: Optional[str],
    stored: Any,
) -> dict[str, Any] | None:
    """
    Pure helper: apply the triggering user input to the stored ExplorerState
    and return the new state as a dict for the store.

    Switching dataset (or a missing/stale stored state) starts from the
    dataset's defaults; query/category values from the previous dataset are
    stale at that point and are ignored.
    """
    cfg = ctx.cfg_by_name.get(dataset_name) if dataset_name else None
    if cfg is None:
        return None

    dataset_changed = IDs.Control.DATASET_SELECT in triggered
    current = try_parse_explorer_state(stored)

    if dataset_changed or current is None or not state_fits_config(current, cfg):
        state = ExplorerState.initial(cfg)
        if dataset_changed:
            return state.to_dict()
    else:
        state = current

    if IDs.Control.SEARCH_INPUT in triggered:
        state = state.with_query(query)
    if IDs.Control.CATEGORY_SELECT in triggered:
        state = state.with_category(category)

    sort_key = _sort_key_from(triggered)
    if sort_key is not None:
        try:
            state = state.with_sort(cfg, sort_key)
        except UnknownSortKeyError:
            # Buttons from the previous dataset can fire once during a switch
            logger.warning("Ignoring sort on unknown key", extra={"dataset": cfg.name, "key": sort_key})

    return state.to_dict()


def _triggered_ids() -> List[Any]:
    """
    Ids of the inputs that fired, with pattern-matching ids decoded to dicts.
    Sort buttons that fired with no clicks (freshly rebuilt) are dropped.
    """
    triggered: List[Any] = []
    for item in dash.ctx.triggered:
        prop_id = item.get("prop_id", ".")
        if prop_id == ".":
            continue
        obj_id, _, _prop = prop_id.rpartition(".")
        if obj_id.startswith("{"):
            if not item.get("value"):
                continue
            triggered.append(json.loads(obj_id))
        else:
            triggered.append(obj_id)
    return triggered


def register_sync_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # UI -> ExplorerState (canonical)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.EXPLORER_STATE, "data"),
        Input(IDs.Control.DATASET_SELECT, "value"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.CATEGORY_SELECT, "value"),
        Input({"type": IDs.Pattern.SORT_BUTTON, "index": ALL}, "n_clicks"),
        State(IDs.Store.EXPLORER_STATE, "data"),
    )
    def sync_explorer_state_from_ui(dataset_name, query, category, _sort_clicks, stored):
        triggered = _triggered_ids()
        if dash.ctx.triggered_id is not None and not triggered:
            # Only zero-click sort buttons fired
            raise exceptions.PreventUpdate

        new_state = _build_next_state(ctx, triggered, dataset_name, query, category, stored)
        if new_state is not None and new_state == stored:
            raise exceptions.PreventUpdate
        return new_state
