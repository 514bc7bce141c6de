from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from subsidy_browser.core.exceptions import ConfigError
from subsidy_browser.formatting import FORMATTERS

TEXT = "text"
NUMBER = "number"
FIELD_KINDS = (TEXT, NUMBER)

ASC = "asc"
DESC = "desc"
SORT_DIRECTIONS = (ASC, DESC)

DEFAULT_DISPLAY_LIMIT = 200
DEFAULT_SEARCH_DEBOUNCE_MS = 200


@dataclass(frozen=True)
class FieldSpec:
    """
    One declared column of a dataset.

    - kind: "text" or "number"; decides comparison and the zero value
    - format: display formatter name (see formatting.FORMATTERS)
    - compare_as: optional formatter applied to text before search/sort,
      e.g. "program" so raw USDA program codes match their readable names
    - source: optional dotted path ("topPrograms.0.program") copied into
      the record under `name` at load time; `default` fills it when absent
    """

    name: str
    label: str
    kind: str = TEXT
    format: str = "text"
    sortable: bool = True
    compare_as: Optional[str] = None
    source: Optional[str] = None
    default: Optional[str] = None

    @property
    def is_numeric(self) -> bool:
        return self.kind == NUMBER

    @property
    def default_direction(self) -> str:
        # A-Z first for text columns, highest-first for amounts
        return DESC if self.is_numeric else ASC

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> FieldSpec:
        if "name" not in raw:
            raise ConfigError(f"Field declaration without a 'name': {raw}")

        kind = raw.get("kind", TEXT)
        if kind not in FIELD_KINDS:
            raise ConfigError(f"Field '{raw['name']}' has unknown kind '{kind}'")

        fmt = raw.get("format", "count" if kind == NUMBER else "text")
        if fmt not in FORMATTERS:
            raise ConfigError(f"Field '{raw['name']}' has unknown format '{fmt}'")

        compare_as = raw.get("compare_as")
        if compare_as is not None and compare_as not in FORMATTERS:
            raise ConfigError(f"Field '{raw['name']}' has unknown compare_as '{compare_as}'")

        source = raw.get("source")
        if source is not None and (not isinstance(source, str) or not source.strip(".")):
            raise ConfigError(f"Field '{raw['name']}' has an empty source path")

        return cls(
            name=raw["name"],
            label=raw.get("label", raw["name"].title()),
            kind=kind,
            format=fmt,
            sortable=bool(raw.get("sortable", True)),
            compare_as=compare_as,
            source=source,
            default=raw.get("default"),
        )


@dataclass(frozen=True)
class DerivedField:
    """Ratio column computed once at load time: name = numerator / denominator."""

    name: str
    numerator: str
    denominator: str

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> DerivedField:
        try:
            return cls(
                name=raw["name"],
                numerator=raw["numerator"],
                denominator=raw["denominator"],
            )
        except KeyError as e:
            raise ConfigError(f"Derived field is missing {e}: {raw}") from e


@dataclass(frozen=True)
class SortSpec:
    key: str
    direction: str = DESC


@dataclass
class DatasetConfig:
    """
    Parsed explorer config entry for a single dataset.
    """

    raw: Dict[str, Any]
    source_path: Path
    index: int

    @property
    def name(self) -> str:
        return self.raw.get("name", f"Dataset {self.index}")

    @property
    def title(self) -> str:
        return self.raw.get("title", self.name)

    @property
    def noun(self) -> str:
        """Plural noun used in the count badge, e.g. '52 states'."""
        return self.raw.get("noun", "results")

    @property
    def file(self) -> Path:
        raw_file = self.raw.get("file") or self.raw.get("path")
        if raw_file is None:
            raise ConfigError(f"No 'file' or 'path' in dataset config: {self.name}")
        return Path(raw_file)

    @property
    def records_key(self) -> Optional[str]:
        return self.raw.get("records_key")

    @property
    def row_key(self) -> Optional[str]:
        return self.raw.get("row_key")

    @property
    def fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(FieldSpec.from_raw(f) for f in self.raw.get("fields", []))

    @property
    def derived(self) -> Tuple[DerivedField, ...]:
        return tuple(DerivedField.from_raw(d) for d in self.raw.get("derived", []))

    @property
    def search_fields(self) -> Tuple[str, ...]:
        return tuple(self.raw.get("search_fields", []))

    @property
    def category_field(self) -> Optional[str]:
        return self.raw.get("category_field") or None

    @property
    def category_label(self) -> str:
        return self.raw.get("category_label", "All")

    @property
    def default_sort(self) -> SortSpec:
        raw_sort = self.raw.get("default_sort") or {}
        key = raw_sort.get("key")
        if key is None:
            numeric = [f for f in self.fields if f.is_numeric and f.sortable]
            key = numeric[0].name if numeric else self.fields[0].name
        direction = raw_sort.get("direction")
        if direction is None:
            try:
                direction = self.field(key).default_direction
            except KeyError:
                direction = DESC
        return SortSpec(key=key, direction=direction)

    @property
    def display_limit(self) -> Optional[int]:
        """Per-dataset truncation override; None means use the global limit."""
        limit = self.raw.get("display_limit")
        return int(limit) if limit is not None else None

    def field(self, name: str) -> FieldSpec:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(f"Field '{name}' not declared for dataset '{self.name}'")

    def sortable_fields(self) -> List[FieldSpec]:
        return [f for f in self.fields if f.sortable]

    def validate(self) -> None:
        """
        Check the field declarations hang together.

        :raises ConfigError: on an empty/duplicate field list, or a search,
            category, sort or derived field that is not declared.
        """
        fields = self.fields
        if not fields:
            raise ConfigError(f"Dataset '{self.name}' declares no fields")

        names = [f.name for f in fields]
        if len(set(names)) != len(names):
            raise ConfigError(f"Dataset '{self.name}' declares duplicate fields: {names}")

        for name in self.search_fields:
            if name not in names:
                raise ConfigError(f"Dataset '{self.name}': search field '{name}' is not declared")

        if self.category_field and self.category_field not in names:
            raise ConfigError(
                f"Dataset '{self.name}': category field '{self.category_field}' is not declared"
            )

        for d in self.derived:
            if d.name not in names:
                raise ConfigError(f"Dataset '{self.name}': derived field '{d.name}' is not declared")

        sort = self.default_sort
        if sort.key not in names or not self.field(sort.key).sortable:
            raise ConfigError(f"Dataset '{self.name}': default sort key '{sort.key}' is not sortable")
        if sort.direction not in SORT_DIRECTIONS:
            raise ConfigError(
                f"Dataset '{self.name}': default sort direction '{sort.direction}' is invalid"
            )

        if self.display_limit is not None and self.display_limit < 1:
            raise ConfigError(f"Dataset '{self.name}': display_limit must be positive")

    @classmethod
    def from_raw(
        cls, raw: Dict[str, Any], source_path: Path, index: int
    ) -> DatasetConfig:
        cfg = cls(raw=raw, source_path=source_path, index=index)
        cfg.validate()
        return cfg


@dataclass
class GlobalConfig:
    ui_title: str
    default_dataset: Optional[str]
    datasets: List[DatasetConfig]
    data_root: Optional[Path] = None
    subtitle: str = "USDA farm subsidy payments"
    display_limit: int = DEFAULT_DISPLAY_LIMIT
    search_debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS

    def limit_for(self, cfg: DatasetConfig) -> int:
        return cfg.display_limit or self.display_limit
