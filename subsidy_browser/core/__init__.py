"""
Core domain layer: dataset configs, the immutable explorer state, the
filter/sort/truncate explorer and the loaded Dataset abstraction
"""

from .configs import DatasetConfig, FieldSpec, GlobalConfig
from .dataset import Dataset
from .explorer import Explorer, ExplorerView, compute_view
from .explorer_state import ExplorerState

__all__ = [
    "DatasetConfig",
    "FieldSpec",
    "GlobalConfig",
    "Dataset",
    "Explorer",
    "ExplorerView",
    "compute_view",
    "ExplorerState",
]
