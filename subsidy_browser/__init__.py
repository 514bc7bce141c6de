"""
Top-level package for the farm subsidy browser.

This package exposes the core architecture (domain, config, UI adapters).
Most code should import from submodules such as:
    subsidy_browser.core
    subsidy_browser.config
    subsidy_browser.ui
"""

__all__: list[str] = []
