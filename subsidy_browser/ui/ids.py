from __future__ import annotations

__all__ = ["IDs", "sort_button_id"]


class IDs:
    class Store:
        EXPLORER_STATE = "explorer-state"

    class Control:
        # Navbar
        DATASET_SELECT = "dataset-select"

        # Sidebar metadata
        SIDEBAR_DATASET_NAME = "sidebar-dataset-name"
        SIDEBAR_DATASET_META = "sidebar-dataset-meta"

        # Explorer inputs
        SEARCH_INPUT = "search-input"
        CATEGORY_SELECT = "category-select"
        CATEGORY_FILTER_CONTAINER = "category-filter-container"
        CATEGORY_LABEL = "category-label"
        SORT_BUTTONS_CONTAINER = "sort-buttons-container"

        # Table
        RESULTS_TABLE = "results-table"
        RESULTS_COUNT = "results-count"
        TRUNCATION_MESSAGE = "truncation-message"
        TABLE_TITLE = "table-title"

        # Chart + downloads
        MAIN_GRAPH = "main-graph"
        DOWNLOAD_DATA = "download-data"
        DOWNLOAD_DATA_BTN = "download-data-btn"

    class Pattern:
        # pattern-matching "type" strings
        SORT_BUTTON = "sort-button"


def sort_button_id(field_name: str) -> dict:
    return {"type": IDs.Pattern.SORT_BUTTON, "index": field_name}
