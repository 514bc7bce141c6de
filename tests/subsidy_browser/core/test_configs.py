from pathlib import Path

import pytest

from subsidy_browser.core.configs import DatasetConfig, FieldSpec, GlobalConfig
from subsidy_browser.core.exceptions import ConfigError


def _make_raw(**overrides) -> dict:
    raw = {
        "name": "states",
        "file": "states.json",
        "fields": [
            {"name": "name", "label": "State"},
            {"name": "payments", "kind": "number"},
            {"name": "amount", "kind": "number", "format": "money"},
        ],
    }
    raw.update(overrides)
    return raw


def _make_config(**overrides) -> DatasetConfig:
    return DatasetConfig.from_raw(_make_raw(**overrides), source_path=Path("states.json"), index=0)


def test_field_spec_defaults():
    text = FieldSpec.from_raw({"name": "county"})
    number = FieldSpec.from_raw({"name": "payments", "kind": "number"})

    assert (text.label, text.kind, text.format, text.sortable) == ("County", "text", "text", True)
    assert number.format == "count"
    assert number.default_direction == "desc"
    assert text.default_direction == "asc"


@pytest.mark.parametrize(
    "raw",
    [
        {"label": "No name"},
        {"name": "x", "kind": "date"},
        {"name": "x", "format": "percent"},
        {"name": "x", "compare_as": "reverse"},
        {"name": "x", "source": ""},
        {"name": "x", "source": "..."},
    ],
)
def test_field_spec_rejects_bad_declarations(raw):
    with pytest.raises(ConfigError):
        FieldSpec.from_raw(raw)


def test_default_sort_falls_back_to_first_numeric_field():
    cfg = _make_config()

    assert cfg.default_sort.key == "payments"
    assert cfg.default_sort.direction == "desc"


def test_default_sort_direction_follows_field_kind():
    cfg = _make_config(default_sort={"key": "name"})

    assert cfg.default_sort.direction == "asc"


def test_properties_and_defaults():
    cfg = _make_config(noun="states")

    assert cfg.title == "states"
    assert cfg.noun == "states"
    assert cfg.file == Path("states.json")
    assert cfg.category_field is None
    assert cfg.category_label == "All"
    assert cfg.display_limit is None
    assert [f.name for f in cfg.sortable_fields()] == ["name", "payments", "amount"]


def test_field_lookup_raises_for_unknown_name():
    with pytest.raises(KeyError):
        _make_config().field("nope")


@pytest.mark.parametrize(
    "overrides",
    [
        {"fields": []},
        {"fields": [{"name": "a"}, {"name": "a"}]},
        {"search_fields": ["missing"]},
        {"category_field": "missing"},
        {"derived": [{"name": "avg", "numerator": "amount", "denominator": "payments"}]},
        {"default_sort": {"key": "missing"}},
        {"default_sort": {"key": "amount", "direction": "up"}},
        {"display_limit": 0},
    ],
)
def test_invalid_dataset_config_raises(overrides):
    with pytest.raises(ConfigError):
        _make_config(**overrides)


def test_unsortable_default_sort_key_raises():
    fields = [{"name": "name", "sortable": False}, {"name": "amount", "kind": "number"}]
    with pytest.raises(ConfigError):
        _make_config(fields=fields, default_sort={"key": "name"})


def test_missing_file_raises_config_error():
    raw = _make_raw()
    del raw["file"]
    cfg = DatasetConfig(raw=raw, source_path=Path("x.json"), index=0)

    with pytest.raises(ConfigError):
        _ = cfg.file


def test_limit_for_prefers_dataset_override():
    plain = _make_config()
    limited = _make_config(name="small", display_limit=25)
    global_config = GlobalConfig(ui_title="t", default_dataset=None, datasets=[plain, limited])

    assert global_config.limit_for(plain) == 200
    assert global_config.limit_for(limited) == 25
