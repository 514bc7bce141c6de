from __future__ import annotations
import logging
from typing import Optional

from subsidy_browser.core.configs import DatasetConfig
from subsidy_browser.core.explorer_state import ExplorerState

logger = logging.getLogger(__name__)

def try_parse_explorer_state(data: object) -> Optional[ExplorerState]:
    if not isinstance(data, dict) or not data:
        return None
    try:
        return ExplorerState.from_dict(data)
    except (KeyError, TypeError, ValueError):
        logger.exception("Invalid explorer-state: %r", data)
        return None


def state_fits_config(state: ExplorerState, cfg: DatasetConfig) -> bool:
    """Stored state is usable only for its own dataset and a sortable key."""
    if state.dataset_name != cfg.name:
        return False
    try:
        return cfg.field(state.sort_key).sortable
    except KeyError:
        return False
