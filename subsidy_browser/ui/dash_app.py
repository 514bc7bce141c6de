from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from subsidy_browser.config.io import load_dataset_registry
from subsidy_browser.core.configs import DatasetConfig, GlobalConfig
from subsidy_browser.services.dataset_service import DatasetManager
from subsidy_browser.ui.layout.build_layout import build_layout
from subsidy_browser.ui.callbacks.callbacks_filters import register_filter_callbacks
from subsidy_browser.ui.callbacks.callbacks_sync import register_sync_callbacks
from subsidy_browser.ui.callbacks.callbacks_render import register_render_callbacks
from subsidy_browser.ui.callbacks.callbacks_io import register_io_callbacks

logger = logging.getLogger(__name__)


def _choose_default_dataset(
    global_config: GlobalConfig, cfg_by_name: Dict[str, DatasetConfig]
) -> Optional[str]:
    if not cfg_by_name:
        return None

    preferred = global_config.default_dataset
    if preferred and preferred in cfg_by_name:
        return preferred
    if preferred:
        logger.warning("Configured default dataset not found", extra={"default_dataset": preferred})

    # Fallback: first in config-file order
    return next(iter(cfg_by_name))


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config, cfg_by_name = load_dataset_registry(config_root)
    if not cfg_by_name:
        raise RuntimeError("No dataset configs were loaded from config")

    # 2) Initialize Service Layer (data files are read lazily)
    dataset_manager = DatasetManager(cfg_by_name, data_root=global_config.data_root)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        dataset_names=list(cfg_by_name.keys()),
        cfg_by_name=cfg_by_name,
        dataset_by_name=dataset_manager,
        default_dataset_name=_choose_default_dataset(global_config, cfg_by_name),
    )
    ctx.validate()

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        suppress_callback_exceptions=True,
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_sync_callbacks(app, ctx)
    register_filter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_io_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"datasets": ctx.dataset_names, "default_dataset": ctx.default_dataset_name},
    )

    return app
