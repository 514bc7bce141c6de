from __future__ import annotations

from pathlib import Path

from subsidy_browser.core.configs import DatasetConfig
from subsidy_browser.core.explorer import Explorer, compute_view
from subsidy_browser.core.explorer_state import ExplorerState


def _make_config(default_sort=None, **overrides) -> DatasetConfig:
    raw = {
        "name": "recipients",
        "file": "recipients.json",
        "fields": [
            {"name": "name", "label": "Recipient", "kind": "text"},
            {"name": "state", "label": "State", "kind": "text"},
            {"name": "amount", "label": "Amount", "kind": "number", "format": "money"},
        ],
        "search_fields": ["name"],
        "category_field": "state",
        "default_sort": default_sort or {"key": "name", "direction": "asc"},
    }
    raw.update(overrides)
    return DatasetConfig.from_raw(raw, source_path=Path("recipients.json"), index=0)


def _make_records():
    return [
        {"name": "Acme LLC", "state": "TX", "amount": 500000},
        {"name": "Baker Farms", "state": "IA", "amount": 200000},
        {"name": "Cedar Co", "state": "TX", "amount": 900000},
    ]


def _names(view):
    return [r["name"] for r in view.rows]


def test_sort_by_amount_defaults_to_descending():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_sort("amount")

    assert explorer.state.sort_dir == "desc"
    assert _names(explorer.view) == ["Cedar Co", "Acme LLC", "Baker Farms"]


def test_sort_by_amount_twice_flips_to_ascending():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_sort("amount")
    explorer.set_sort("amount")

    assert explorer.state.sort_dir == "asc"
    assert _names(explorer.view) == ["Baker Farms", "Acme LLC", "Cedar Co"]


def test_category_filter_restricts_to_state():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_category_filter("TX")

    assert _names(explorer.view) == ["Acme LLC", "Cedar Co"]
    assert explorer.total_count == 2


def test_category_filter_follows_current_sort():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_sort("amount")
    explorer.set_category_filter("TX")

    assert _names(explorer.view) == ["Cedar Co", "Acme LLC"]


def test_clearing_category_filter_restores_all_rows():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_category_filter("TX")
    explorer.set_category_filter(None)
    assert explorer.total_count == 3

    explorer.set_category_filter("TX")
    explorer.set_category_filter("")
    assert explorer.total_count == 3


def test_query_is_case_insensitive_substring():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_query("bak")
    assert _names(explorer.view) == ["Baker Farms"]
    assert explorer.total_count == 1

    explorer.set_query("FARMS")
    assert _names(explorer.view) == ["Baker Farms"]


def test_query_with_no_match_is_empty_not_an_error():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_query("zzz-no-match")

    assert explorer.view.rows == ()
    assert explorer.total_count == 0
    assert explorer.displayed_count == 0


def test_empty_query_clears_text_filter():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_query("bak")
    explorer.set_query("")

    assert explorer.total_count == 3


def test_query_only_searches_configured_fields():
    explorer = Explorer(_make_records(), _make_config())

    # "TX" lives in the state field, which is not a search field
    explorer.set_query("tx")

    assert explorer.total_count == 0


def test_query_searches_all_text_fields_when_none_configured():
    explorer = Explorer(_make_records(), _make_config(search_fields=[]))

    explorer.set_query("ia")

    assert _names(explorer.view) == ["Baker Farms"]


def test_query_and_category_combine():
    explorer = Explorer(_make_records(), _make_config())

    explorer.set_category_filter("TX")
    explorer.set_query("co")

    assert _names(explorer.view) == ["Cedar Co"]


def test_records_are_never_mutated():
    records = _make_records()
    snapshot = [dict(r) for r in records]
    explorer = Explorer(records, _make_config())

    explorer.set_sort("amount")
    explorer.set_query("a")
    explorer.set_category_filter("TX")
    _ = explorer.view

    assert records == snapshot
    assert [r["name"] for r in explorer.records] == ["Acme LLC", "Baker Farms", "Cedar Co"]


def test_view_is_a_subset_without_duplicates():
    records = _make_records()
    cfg = _make_config()
    states = [
        ExplorerState.initial(cfg),
        ExplorerState.initial(cfg).with_query("a"),
        ExplorerState.initial(cfg).with_category("TX").with_sort(cfg, "amount"),
        ExplorerState.initial(cfg).with_query("zzz"),
    ]

    for state in states:
        view = compute_view(records, cfg, state)
        ids = [id(r) for r in view.matched]
        assert len(ids) == len(set(ids))
        assert all(any(r is original for original in records) for r in view.matched)


def test_same_state_twice_yields_same_view():
    records = _make_records()
    cfg = _make_config()
    state = ExplorerState.initial(cfg).with_query("a").with_sort(cfg, "amount")

    first = compute_view(records, cfg, state)
    second = compute_view(records, cfg, state)

    assert first == second

    explorer = Explorer(records, cfg)
    explorer.set_query("a")
    once = _names(explorer.view)
    explorer.set_query("a")
    assert _names(explorer.view) == once


def test_sort_is_stable_for_equal_keys_in_both_directions():
    records = [
        {"name": "First", "state": "TX", "amount": 100},
        {"name": "Second", "state": "TX", "amount": 300},
        {"name": "Third", "state": "TX", "amount": 100},
        {"name": "Fourth", "state": "TX", "amount": 100},
    ]
    cfg = _make_config()
    state = ExplorerState.initial(cfg).with_sort(cfg, "amount")

    desc = compute_view(records, cfg, state)
    assert _names(desc) == ["Second", "First", "Third", "Fourth"]

    asc = compute_view(records, cfg, state.with_sort(cfg, "amount"))
    assert _names(asc) == ["First", "Third", "Fourth", "Second"]


def test_text_sort_ignores_case():
    records = [
        {"name": "delta farms", "state": "TX", "amount": 1},
        {"name": "Charlie Co", "state": "TX", "amount": 1},
        {"name": "ECHO LLC", "state": "TX", "amount": 1},
    ]
    explorer = Explorer(records, _make_config())

    assert _names(explorer.view) == ["Charlie Co", "delta farms", "ECHO LLC"]


def test_missing_fields_count_as_zero_values():
    records = [
        {"name": "Has Amount", "state": "TX", "amount": 10},
        {"state": "TX"},
        {"name": "Bad Amount", "state": "IA", "amount": "n/a"},
    ]
    explorer = Explorer(records, _make_config())

    # missing name sorts as "" (first ascending)
    assert explorer.view.rows[0] == {"state": "TX"}

    explorer.set_sort("amount")
    assert explorer.view.rows[0]["name"] == "Has Amount"

    explorer.set_query("amount")
    assert explorer.total_count == 2


def test_numeric_strings_sort_numerically():
    records = [
        {"name": "A", "state": "TX", "amount": "900"},
        {"name": "B", "state": "TX", "amount": 1000},
        {"name": "C", "state": "TX", "amount": "80.5"},
    ]
    explorer = Explorer(records, _make_config())

    explorer.set_sort("amount")

    assert _names(explorer.view) == ["B", "A", "C"]


def test_truncation_keeps_total_count():
    records = [{"name": f"Farm {i:04d}", "state": "TX", "amount": i} for i in range(450)]
    explorer = Explorer(records, _make_config())

    view = explorer.view

    assert view.total_count == 450
    assert view.displayed_count == 200
    assert len(view.rows) == 200
    assert len(view.matched) == 450
    assert view.is_truncated


def test_displayed_count_is_min_of_total_and_limit():
    records = [{"name": f"Farm {i}", "state": "TX", "amount": i} for i in range(30)]
    cfg = _make_config()

    for limit in (1, 10, 30, 200):
        view = compute_view(records, cfg, ExplorerState.initial(cfg), limit=limit)
        assert view.displayed_count == min(view.total_count, limit)
        assert view.total_count == 30
        assert view.is_truncated == (limit < 30)


def test_compare_as_drives_search_and_sort():
    raw_cfg = {
        "name": "programs",
        "file": "programs.json",
        "fields": [
            {"name": "program", "label": "Program", "format": "program", "compare_as": "program"},
            {"name": "amount", "kind": "number"},
        ],
        "search_fields": ["program"],
        "default_sort": {"key": "program"},
    }
    cfg = DatasetConfig.from_raw(raw_cfg, source_path=Path("programs.json"), index=0)
    records = [
        {"program": "CRP PAYMENT - ANNUAL RENTAL", "amount": 3},
        {"program": "CFAPCCA2", "amount": 2},
        {"program": "AGRICULTURAL RISK COVERAGE PROG - COUNTY", "amount": 1},
    ]
    explorer = Explorer(records, cfg)

    # Sorted by readable names: Agriculture..., CFAP Round 2, CRP Annual Rental
    assert [r["amount"] for r in explorer.view.rows] == [1, 2, 3]

    explorer.set_query("round 2")
    assert [r["program"] for r in explorer.view.rows] == ["CFAPCCA2"]


def test_accented_names_sort_with_their_base_letter():
    records = [
        {"name": "Zeta Farms", "state": "TX", "amount": 1},
        {"name": "Émile Ranch", "state": "TX", "amount": 1},
        {"name": "Apple Co", "state": "TX", "amount": 1},
        {"name": "älvsby acres", "state": "TX", "amount": 1},
    ]
    explorer = Explorer(records, _make_config())

    assert _names(explorer.view) == ["älvsby acres", "Apple Co", "Émile Ranch", "Zeta Farms"]

    explorer.set_sort("name")
    assert _names(explorer.view) == ["Zeta Farms", "Émile Ranch", "Apple Co", "älvsby acres"]


def test_null_characters_in_text_do_not_break_sorting():
    records = [
        {"name": "c", "state": "TX", "amount": 1},
        {"name": "a\x00b", "state": "TX", "amount": 2},
    ]
    explorer = Explorer(records, _make_config())

    assert _names(explorer.view) == ["a\x00b", "c"]

    explorer.set_query("\x00")
    assert explorer.total_count == 1
