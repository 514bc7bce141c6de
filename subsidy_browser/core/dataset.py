from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from subsidy_browser.core.configs import DEFAULT_DISPLAY_LIMIT, DatasetConfig
from subsidy_browser.core.explorer import Explorer, ExplorerView, compute_view
from subsidy_browser.core.explorer_state import ExplorerState


class Dataset:
    """
    One loaded explorer dataset: its config plus an immutable tuple of records.

    Records are read once by the loader and never mutated afterwards; every
    explorer view is derived from them on demand.
    """

    def __init__(
        self,
        config: DatasetConfig,
        records: Sequence[Mapping[str, Any]],
        file_path: Optional[Path] = None,
    ) -> None:
        self.config = config
        self.records: Tuple[Mapping[str, Any], ...] = tuple(records)
        self.file_path = file_path
        self._category_values: Optional[List[str]] = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def title(self) -> str:
        return self.config.title

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        return f"Dataset(name={self.name!r}, n_records={len(self.records)})"

    def category_values(self) -> List[str]:
        """
        Sorted distinct values of the category field (e.g. state abbreviations).
        Empty when the dataset has no category filter.
        """
        if self._category_values is None:
            field_name = self.config.category_field
            if field_name is None:
                self._category_values = []
            else:
                values = {str(r[field_name]) for r in self.records if r.get(field_name) not in (None, "")}
                self._category_values = sorted(values)
        return self._category_values

    def initial_state(self) -> ExplorerState:
        return ExplorerState.initial(self.config)

    def view(self, state: ExplorerState, limit: int = DEFAULT_DISPLAY_LIMIT) -> ExplorerView:
        return compute_view(self.records, self.config, state, limit)

    def explorer(self, limit: int = DEFAULT_DISPLAY_LIMIT) -> Explorer:
        return Explorer(self.records, self.config, limit=limit)
