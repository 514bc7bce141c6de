import json
from pathlib import Path

import pytest
from dash import Dash

from subsidy_browser.ui.dash_app import create_dash_app

REPO_CONFIG = Path(__file__).resolve().parents[3] / "config"


def test_create_dash_app_from_shipped_config():
    app = create_dash_app(REPO_CONFIG)

    assert isinstance(app, Dash)
    assert app.title == "Farm Subsidy Browser"
    assert app.layout is not None
    assert len(app.callback_map) >= 4


def test_create_dash_app_without_datasets_raises(tmp_path):
    (tmp_path / "global.json").write_text(json.dumps({"ui_title": "Empty"}))

    with pytest.raises(RuntimeError):
        create_dash_app(tmp_path)
