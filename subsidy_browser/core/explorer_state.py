from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

from subsidy_browser.core.configs import ASC, DESC, SORT_DIRECTIONS, DatasetConfig
from subsidy_browser.core.exceptions import UnknownSortKeyError


@dataclass(frozen=True)
class ExplorerState:
    """
    Represents the current user selection for one dataset explorer.

    Fields:

    - dataset_name: dataset the state belongs to
    - query: free-text search; empty string means no text filter
    - category: exact-match category value (e.g. a state abbreviation), or None
    - sort_key / sort_dir: active sort column and "asc"/"desc"

    Instances are immutable: every setter returns a new state, and the view is
    recomputed from the state as a pure function.
    """

    dataset_name: str
    sort_key: str
    sort_dir: str = DESC
    query: str = ""
    category: Optional[str] = None

    @classmethod
    def initial(cls, cfg: DatasetConfig) -> ExplorerState:
        sort = cfg.default_sort
        return cls(dataset_name=cfg.name, sort_key=sort.key, sort_dir=sort.direction)

    def with_query(self, text: Optional[str]) -> ExplorerState:
        return replace(self, query=text or "")

    def with_category(self, value: Optional[str]) -> ExplorerState:
        return replace(self, category=value or None)

    def with_sort(
        self,
        cfg: DatasetConfig,
        key: str,
        direction: Optional[str] = None,
    ) -> ExplorerState:
        """
        Same key without a direction toggles; a new key starts at its default
        direction (ascending for text, descending for numbers). An explicit
        direction always wins.

        :raises UnknownSortKeyError: if key is not a sortable field of cfg
        """
        try:
            spec = cfg.field(key)
        except KeyError:
            raise UnknownSortKeyError(f"'{key}' is not a field of dataset '{cfg.name}'")
        if not spec.sortable:
            raise UnknownSortKeyError(f"'{key}' is not sortable in dataset '{cfg.name}'")

        if direction is not None:
            if direction not in SORT_DIRECTIONS:
                raise ValueError(f"Sort direction must be one of {SORT_DIRECTIONS}, got {direction!r}")
            return replace(self, sort_key=key, sort_dir=direction)

        if key == self.sort_key:
            return replace(self, sort_dir=ASC if self.sort_dir == DESC else DESC)

        return replace(self, sort_key=key, sort_dir=spec.default_direction)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ExplorerState:
        sort_dir = data.get("sort_dir", DESC)
        if sort_dir not in SORT_DIRECTIONS:
            raise ValueError(f"Invalid sort direction in stored state: {sort_dir!r}")
        return cls(
            dataset_name=data["dataset_name"],
            sort_key=data["sort_key"],
            sort_dir=sort_dir,
            query=data.get("query") or "",
            category=data.get("category") or None,
        )
