from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from subsidy_browser.core.configs import DatasetConfig, DerivedField, FieldSpec
from subsidy_browser.core.dataset import Dataset
from subsidy_browser.core.exceptions import DatasetLoadError
from subsidy_browser.core.explorer import numeric_value

logger = logging.getLogger(__name__)


def _resolve_path(cfg: DatasetConfig, data_root: Optional[Path]) -> Path:
    """
    Relative data files resolve against SUBSIDY_BROWSER_DATA_ROOT if set,
    else against the configured data_root, else the working directory.
    """
    path = cfg.file
    if path.is_absolute():
        return path

    env_root = os.environ.get("SUBSIDY_BROWSER_DATA_ROOT")
    if env_root:
        return Path(env_root) / path
    if data_root is not None:
        return data_root / path
    return path


def _extract_records(raw: Any, cfg: DatasetConfig, path: Path) -> List[Any]:
    if cfg.records_key:
        if not isinstance(raw, dict) or cfg.records_key not in raw:
            raise DatasetLoadError(
                f"Dataset '{cfg.name}': key '{cfg.records_key}' not found in {path}"
            )
        raw = raw[cfg.records_key]

    if not isinstance(raw, list):
        raise DatasetLoadError(
            f"Dataset '{cfg.name}': expected a JSON array of records in {path}, "
            f"got {type(raw).__name__}"
        )
    return raw


def _with_derived(record: Dict[str, Any], derived: tuple[DerivedField, ...]) -> Dict[str, Any]:
    """Copy of record with ratio fields added; a zero denominator yields 0."""
    out = dict(record)
    for d in derived:
        denominator = numeric_value(record, d.denominator)
        out[d.name] = numeric_value(record, d.numerator) / denominator if denominator else 0
    return out


def _lookup_path(record: Any, path: str) -> Any:
    """
    Follow a dotted path through nested objects and lists, e.g.
    "topPrograms.0.program". Any missing step yields None.
    """
    value = record
    for part in path.split("."):
        if isinstance(value, dict):
            value = value.get(part)
        elif isinstance(value, list) and part.isdigit():
            index = int(part)
            value = value[index] if index < len(value) else None
        else:
            return None
        if value is None:
            return None
    return value


def _with_sourced(record: Dict[str, Any], fields: tuple[FieldSpec, ...]) -> Dict[str, Any]:
    out = dict(record)
    for f in fields:
        value = _lookup_path(record, f.source)
        out[f.name] = f.default if value is None else value
    return out


def from_config(cfg: DatasetConfig, data_root: Optional[Path] = None) -> Dataset:
    """
    Materialise a Dataset from its config by reading the JSON data file.

    :raises DatasetLoadError: if the file is missing, unreadable, unparseable
        or not a list of records.
    """
    path = _resolve_path(cfg, data_root)

    if not path.is_file():
        raise DatasetLoadError(f"Data file for dataset '{cfg.name}' not found at {path}.")

    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DatasetLoadError(f"Data file for dataset '{cfg.name}' is not valid JSON: {e}") from e
    except OSError as e:
        raise DatasetLoadError(f"Data file for dataset '{cfg.name}' could not be read: {e}") from e

    entries = _extract_records(raw, cfg, path)

    records = [e for e in entries if isinstance(e, dict)]
    skipped = len(entries) - len(records)
    if skipped:
        logger.warning(
            "Skipping non-object entries in data file",
            extra={"dataset": cfg.name, "path": str(path), "n_skipped": skipped},
        )

    sourced = tuple(f for f in cfg.fields if f.source)
    if sourced:
        records = [_with_sourced(r, sourced) for r in records]

    derived = cfg.derived
    if derived:
        records = [_with_derived(r, derived) for r in records]

    logger.info(
        "Dataset loaded",
        extra={"dataset": cfg.name, "path": str(path), "n_records": len(records)},
    )

    return Dataset(config=cfg, records=records, file_path=path)
