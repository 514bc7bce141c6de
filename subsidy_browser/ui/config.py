from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from subsidy_browser.core.configs import DatasetConfig, GlobalConfig
from subsidy_browser.services.dataset_service import DatasetManager


@dataclass
class AppConfig:
    """
    Shared state for the Dash app: config root, dataset configs and the lazy
    DatasetManager. Passed into layout + callback registration functions
    instead of using module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    dataset_names: List[str] = field(default_factory=list)
    cfg_by_name: Dict[str, DatasetConfig] = field(default_factory=dict)
    dataset_by_name: Optional[DatasetManager] = None
    default_dataset_name: Optional[str] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.dataset_by_name is None:
            raise RuntimeError("AppConfig.dataset_by_name must be initialized.")

    def limit_for(self, dataset_name: str) -> int:
        cfg = self.cfg_by_name.get(dataset_name)
        if cfg is None:
            return self.global_config.display_limit
        return self.global_config.limit_for(cfg)
