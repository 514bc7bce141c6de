"""
Config package for subsidy_browser.

Responsible for:
- config I/O helpers (load_global_config / load_dataset_registry)
- re-exporting the config models that live in subsidy_browser.core.configs
"""

from subsidy_browser.core.configs import DatasetConfig, GlobalConfig
from .io import load_dataset_registry, load_global_config

__all__ = ["DatasetConfig", "GlobalConfig", "load_dataset_registry", "load_global_config"]
