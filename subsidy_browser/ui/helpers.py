from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from subsidy_browser.core.configs import DESC, DatasetConfig, FieldSpec
from subsidy_browser.core.dataset import Dataset
from subsidy_browser.core.explorer import ExplorerView
from subsidy_browser.core.explorer_state import ExplorerState
from subsidy_browser.formatting import FORMATTERS, fmt_count, plain_text

RANK_COLUMN = "_rank"


def get_category_options(dataset: Dataset) -> List[dict]:
    return [{"label": v, "value": v} for v in dataset.category_values()]


def sort_arrow(field: FieldSpec, state: ExplorerState) -> str:
    if field.name != state.sort_key:
        return ""
    return " ↓" if state.sort_dir == DESC else " ↑"


def sort_button_label(field: FieldSpec, state: ExplorerState) -> str:
    return f"{field.label}{sort_arrow(field, state)}"


def table_columns(cfg: DatasetConfig, state: ExplorerState) -> List[dict]:
    columns = [{"name": "#", "id": RANK_COLUMN}]
    for f in cfg.fields:
        columns.append({"name": f"{f.label}{sort_arrow(f, state)}", "id": f.name})
    return columns


def format_cell(field: FieldSpec, record: Dict[str, Any]) -> str:
    value = record.get(field.name)
    if value is None and not field.is_numeric:
        return ""
    return FORMATTERS[field.format](value)


def table_rows(view: ExplorerView, cfg: DatasetConfig) -> List[dict]:
    """
    One dict per displayed row: a 1-based index plus a formatted cell per
    declared field.
    """
    rows = []
    for i, record in enumerate(view.rows, start=1):
        row = {RANK_COLUMN: i}
        if cfg.row_key:
            # DataTable uses the 'id' key as a stable row id
            row["id"] = plain_text(record.get(cfg.row_key))
        for f in cfg.fields:
            row[f.name] = format_cell(f, record)
        rows.append(row)
    return rows


def results_count_text(view: ExplorerView, cfg: DatasetConfig) -> str:
    return f"{fmt_count(view.total_count)} {cfg.noun}"


def truncation_message(view: ExplorerView) -> str:
    """'Showing 200 of 4,812 results.' when truncated, else ''."""
    if not view.is_truncated:
        return ""
    return (
        f"Showing {fmt_count(view.displayed_count)} of {fmt_count(view.total_count)} results. "
        "Refine your search to see more."
    )


def view_frame(view: ExplorerView, cfg: DatasetConfig) -> pd.DataFrame:
    """
    Raw (unformatted) values of every matched record, declared fields only,
    in view order. Used for CSV export, so it ignores truncation.
    """
    names = [f.name for f in cfg.fields]
    return pd.DataFrame(
        [{name: record.get(name) for name in names} for record in view.matched],
        columns=names,
    )
