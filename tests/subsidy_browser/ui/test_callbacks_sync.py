from pathlib import Path

from subsidy_browser.core.configs import DatasetConfig, GlobalConfig
from subsidy_browser.ui.callbacks.callbacks_sync import _build_next_state
from subsidy_browser.ui.config import AppConfig
from subsidy_browser.ui.ids import IDs, sort_button_id


def _make_cfg(name: str) -> DatasetConfig:
    raw = {
        "name": name,
        "file": f"{name}.json",
        "fields": [
            {"name": "name", "label": "Name"},
            {"name": "state", "label": "State"},
            {"name": "amount", "label": "Amount", "kind": "number"},
        ],
        "category_field": "state",
        "default_sort": {"key": "amount", "direction": "desc"},
    }
    return DatasetConfig.from_raw(raw, source_path=Path(f"{name}.json"), index=0)


def _make_ctx() -> AppConfig:
    cfgs = [_make_cfg("states"), _make_cfg("counties")]
    return AppConfig(
        config_root=Path("config"),
        global_config=GlobalConfig(ui_title="t", default_dataset="states", datasets=cfgs),
        dataset_names=[c.name for c in cfgs],
        cfg_by_name={c.name: c for c in cfgs},
        default_dataset_name="states",
    )


def _state(**overrides) -> dict:
    state = {
        "dataset_name": "states",
        "sort_key": "amount",
        "sort_dir": "desc",
        "query": "",
        "category": None,
    }
    state.update(overrides)
    return state


def test_initial_call_builds_default_state():
    assert _build_next_state(_make_ctx(), [], "states", None, None, None) == _state()


def test_unknown_dataset_gives_no_state():
    assert _build_next_state(_make_ctx(), [], "nope", None, None, None) is None
    assert _build_next_state(_make_ctx(), [], None, None, None, None) is None


def test_search_updates_query_only():
    stored = _state(category="TX")

    new = _build_next_state(_make_ctx(), [IDs.Control.SEARCH_INPUT], "states", "kan", "TX", stored)

    assert new == _state(query="kan", category="TX")


def test_category_update_and_clear():
    ctx = _make_ctx()

    filtered = _build_next_state(ctx, [IDs.Control.CATEGORY_SELECT], "states", "", "IA", _state())
    cleared = _build_next_state(ctx, [IDs.Control.CATEGORY_SELECT], "states", "", None, filtered)

    assert filtered["category"] == "IA"
    assert cleared["category"] is None


def test_sort_button_toggles_and_switches_key():
    ctx = _make_ctx()

    toggled = _build_next_state(ctx, [sort_button_id("amount")], "states", "", None, _state())
    by_name = _build_next_state(ctx, [sort_button_id("name")], "states", "", None, toggled)

    assert (toggled["sort_key"], toggled["sort_dir"]) == ("amount", "asc")
    assert (by_name["sort_key"], by_name["sort_dir"]) == ("name", "asc")


def test_dataset_switch_resets_to_defaults():
    stored = _state(query="kan", category="KS", sort_key="name", sort_dir="asc")
    triggered = [IDs.Control.DATASET_SELECT, IDs.Control.SEARCH_INPUT]

    new = _build_next_state(_make_ctx(), triggered, "counties", "kan", "KS", stored)

    assert new == _state(dataset_name="counties")


def test_stale_state_restarts_from_defaults():
    stored = _state(dataset_name="counties", query="old")

    new = _build_next_state(_make_ctx(), [IDs.Control.SEARCH_INPUT], "states", "new", None, stored)

    assert new == _state(query="new")


def test_unknown_sort_key_is_ignored():
    new = _build_next_state(_make_ctx(), [sort_button_id("bogus")], "states", "", None, _state())

    assert new == _state()
