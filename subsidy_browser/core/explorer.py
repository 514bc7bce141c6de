from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from subsidy_browser.core.configs import DEFAULT_DISPLAY_LIMIT, DESC, DatasetConfig, FieldSpec
from subsidy_browser.core.explorer_state import ExplorerState
from subsidy_browser.formatting import FORMATTERS

Record = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Field access
# ---------------------------------------------------------------------------
def numeric_value(record: Record, name: str) -> float:
    """Value of a numeric field; missing or malformed values count as 0."""
    value = record.get(name)
    if value is None or isinstance(value, bool):
        return 0
    if not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            return 0
    # NaN never compares, so it would break ordering
    if value != value:
        return 0
    return value


def text_value(record: Record, field: FieldSpec) -> str:
    """Value of a text field as compared/searched; missing counts as ''."""
    value = record.get(field.name)
    if value is None:
        return ""
    if field.compare_as:
        return FORMATTERS[field.compare_as](value)
    return str(value)


def collation_key(text: str) -> str:
    """
    Accent- and case-insensitive ordering key: "Émile" sorts with "emile",
    between "Apple" and "Zeta".
    """
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _text_sort_key(field: FieldSpec) -> Callable[[Record], str]:
    def key(record: Record) -> str:
        return collation_key(text_value(record, field))

    return key


def _numeric_sort_key(field: FieldSpec) -> Callable[[Record], float]:
    def key(record: Record) -> float:
        return numeric_value(record, field.name)

    return key


def sort_key_for(field: FieldSpec) -> Callable[[Record], Any]:
    return _numeric_sort_key(field) if field.is_numeric else _text_sort_key(field)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------
def matches_query(record: Record, needle: str, fields: Sequence[FieldSpec]) -> bool:
    """needle must already be casefolded; an empty needle matches everything."""
    if not needle:
        return True
    for field in fields:
        if field.is_numeric:
            value = record.get(field.name)
            haystack = "" if value is None else str(value)
        else:
            haystack = text_value(record, field)
        if needle in haystack.casefold():
            return True
    return False


def matches_category(record: Record, field_name: Optional[str], category: Optional[str]) -> bool:
    if not category or not field_name:
        return True
    value = record.get(field_name)
    return value is not None and str(value) == category


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ExplorerView:
    """
    Derived result of one explorer state.

    matched holds every filtered + sorted record; rows is the prefix shown.
    total_count is the filtered size and is unaffected by truncation.
    """

    matched: Tuple[Record, ...]
    limit: int

    @property
    def rows(self) -> Tuple[Record, ...]:
        return self.matched[: self.limit]

    @property
    def total_count(self) -> int:
        return len(self.matched)

    @property
    def displayed_count(self) -> int:
        return min(self.total_count, self.limit)

    @property
    def is_truncated(self) -> bool:
        return self.total_count > self.displayed_count


def search_specs(cfg: DatasetConfig) -> Tuple[FieldSpec, ...]:
    """Configured search fields, or every text field when none are configured."""
    if cfg.search_fields:
        return tuple(cfg.field(name) for name in cfg.search_fields)
    return tuple(f for f in cfg.fields if not f.is_numeric)


def compute_view(
    records: Sequence[Record],
    cfg: DatasetConfig,
    state: ExplorerState,
    limit: int = DEFAULT_DISPLAY_LIMIT,
) -> ExplorerView:
    """
    filter(records) -> sort -> take(limit), as a pure function of its inputs.

    Python's sort is stable in both directions, so records with equal keys
    keep their input order.
    """
    needle = state.query.casefold()
    fields = search_specs(cfg)

    filtered = [
        r
        for r in records
        if matches_category(r, cfg.category_field, state.category)
        and matches_query(r, needle, fields)
    ]

    sort_field = cfg.field(state.sort_key)
    filtered.sort(key=sort_key_for(sort_field), reverse=state.sort_dir == DESC)

    return ExplorerView(matched=tuple(filtered), limit=limit)


class Explorer:
    """
    Tabular explorer over one dataset's records.

    Holds the immutable record tuple and the current ExplorerState. The
    setters swap in a new state; `view` is recomputed on demand.
    """

    def __init__(
        self,
        records: Sequence[Record],
        cfg: DatasetConfig,
        limit: int = DEFAULT_DISPLAY_LIMIT,
        state: Optional[ExplorerState] = None,
    ) -> None:
        self.records: Tuple[Record, ...] = tuple(records)
        self.cfg = cfg
        self.limit = limit
        self.state = state or ExplorerState.initial(cfg)

    def set_query(self, text: Optional[str]) -> None:
        self.state = self.state.with_query(text)

    def set_category_filter(self, value: Optional[str]) -> None:
        self.state = self.state.with_category(value)

    def set_sort(self, key: str, direction: Optional[str] = None) -> None:
        self.state = self.state.with_sort(self.cfg, key, direction)

    @property
    def view(self) -> ExplorerView:
        return compute_view(self.records, self.cfg, self.state, self.limit)

    @property
    def total_count(self) -> int:
        return self.view.total_count

    @property
    def displayed_count(self) -> int:
        return self.view.displayed_count
