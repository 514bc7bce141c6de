from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Tuple

from subsidy_browser.core.configs import (
    DEFAULT_DISPLAY_LIMIT,
    DEFAULT_SEARCH_DEBOUNCE_MS,
    DatasetConfig,
    GlobalConfig,
)
from subsidy_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory using the multi-file layout.

    Expected structure:

        root/
            global.json
            datasets/
                states.json
                recipients.json
                ...

    Each file in 'datasets/' is parsed into a DatasetConfig. The resulting GlobalConfig includes:

    - ui_title / subtitle: navbar text
    - default_dataset: dataset shown on first load (falls back to the first one)
    - data_root: directory holding the JSON data files. If relative in
                 global.json, it is resolved relative to 'root'.
    - display_limit: rows shown before truncation (default 200)
    - search_debounce_ms: quiet period before a search keystroke is applied

    A dataset file that fails to parse or validate is logged and skipped.

    :param root: Directory containing 'global.json' and optionally 'datasets/'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if global.json is not valid JSON or has bad limits.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open(encoding="utf-8") as f:
            raw_global = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    datasets_dir = root / "datasets"
    datasets: List[DatasetConfig] = []

    if datasets_dir.is_dir():
        logger.info(f"Scanning for dataset configurations in: {datasets_dir}")

        files = sorted(datasets_dir.glob("*.json"))
        if not files:
            logger.warning(f"No .json files found in {datasets_dir}")

        for idx, config_file in enumerate(files):
            logger.info(f"Loading dataset config: {config_file.name}")
            try:
                with config_file.open(encoding="utf-8") as f:
                    raw = json.load(f)
                datasets.append(
                    DatasetConfig.from_raw(raw, source_path=config_file, index=idx)
                )
            except (json.JSONDecodeError, ConfigError) as e:
                logger.error(f"Failed to load {config_file.name}: {e}")
    else:
        logger.warning(f"Datasets directory not found at: {datasets_dir}")

    # Absolute paths are used as-is; relative ones resolve against the config root
    data_root_raw = raw_global.get("data_root")
    if data_root_raw is None:
        data_root = None
    else:
        data_root_path = Path(data_root_raw)
        if data_root_path.is_absolute():
            data_root = data_root_path
        else:
            data_root = (root / data_root_path).resolve()

    display_limit = int(raw_global.get("display_limit", DEFAULT_DISPLAY_LIMIT))
    if display_limit < 1:
        raise ConfigError(f"display_limit must be positive, got {display_limit}")

    debounce_ms = int(raw_global.get("search_debounce_ms", DEFAULT_SEARCH_DEBOUNCE_MS))
    if debounce_ms < 0:
        raise ConfigError(f"search_debounce_ms must not be negative, got {debounce_ms}")

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", "Farm Subsidy Browser"),
        subtitle=raw_global.get("subtitle", "USDA farm subsidy payments"),
        default_dataset=raw_global.get("default_dataset"),
        datasets=datasets,
        data_root=data_root,
        display_limit=display_limit,
        search_debounce_ms=debounce_ms,
    )


def load_dataset_registry(path: Path) -> Tuple[GlobalConfig, Dict[str, DatasetConfig]]:
    """
    Load global config + dataset config objects only (no data files are read).
    Returns mapping of dataset name -> DatasetConfig.

    :raises ConfigError: if two dataset configs share a name.
    """
    global_config = load_global_config(path)

    cfg_by_name: Dict[str, DatasetConfig] = {}
    duplicates: List[str] = []

    for ds_cfg in global_config.datasets:
        if ds_cfg.name in cfg_by_name:
            duplicates.append(ds_cfg.name)
            continue
        cfg_by_name[ds_cfg.name] = ds_cfg

    if duplicates:
        raise ConfigError(f"Duplicate dataset names in config: {sorted(set(duplicates))}")

    if not cfg_by_name:
        logger.warning(f"No datasets configured under: {path}")

    logger.info(
        "Dataset registry loaded (lazy mode; data files not read)",
        extra={
            "config_root": str(path),
            "n_dataset_configs": len(cfg_by_name),
            "dataset_names": sorted(cfg_by_name.keys()),
        },
    )

    return global_config, cfg_by_name
