from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

from subsidy_browser.core.configs import DatasetConfig
from subsidy_browser.core.dataset import Dataset
from subsidy_browser.core.dataset_loader import from_config
from subsidy_browser.core.exceptions import DatasetLoadError

logger = logging.getLogger(__name__)


class DatasetManager(Mapping[str, Dataset]):
    """
    Central service for managing datasets.
    Implements the Mapping interface (dict-like) so the UI layer can look
    datasets up by name while the JSON files are only read on first access.
    """

    def __init__(self, cfg_by_name: Dict[str, DatasetConfig], data_root: Optional[Path] = None):
        self._cfg_by_name = cfg_by_name
        self._data_root = data_root
        self._loaded: Dict[str, Dataset] = {}

    def __getitem__(self, name: str) -> Dataset:
        # 1. Fast path: already materialised
        if name in self._loaded:
            return self._loaded[name]

        # 2. Check config existence
        cfg = self._cfg_by_name.get(name)
        if cfg is None:
            raise KeyError(f"Unknown dataset '{name}'")

        # 3. Lazy load
        try:
            logger.info("Lazy-loading dataset", extra={"dataset": cfg.name, "file": str(cfg.file)})
            ds = from_config(cfg, self._data_root)
        except DatasetLoadError as e:
            logger.error(
                "Dataset failed to load",
                extra={"dataset": cfg.name, "error": str(e)},
            )
            raise
        except Exception:
            logger.exception(
                "Unexpected error while loading dataset",
                extra={"dataset": cfg.name},
            )
            raise

        self._loaded[name] = ds
        return ds

    def __iter__(self) -> Iterator[str]:
        return iter(self._cfg_by_name)

    def __len__(self) -> int:
        return len(self._cfg_by_name)

    def __contains__(self, name: object) -> bool:
        # Membership must not trigger a load
        return name in self._cfg_by_name

    def get(self, name: str, default=None) -> Dataset | None:
        """
        Like dict.get, but a dataset whose data file fails to load also
        returns default; the failure has already been logged by __getitem__.
        """
        try:
            return self[name]
        except (KeyError, DatasetLoadError):
            return default

    def config(self, name: str) -> Optional[DatasetConfig]:
        return self._cfg_by_name.get(name)

    def is_loaded(self, name: str) -> bool:
        return name in self._loaded
