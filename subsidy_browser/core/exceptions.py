

class SubsidyBrowserError(Exception):
    """Base exception for all subsidy_browser errors"""
    pass

class ConfigError(SubsidyBrowserError):
    """Invalid or inconsistent global.json or dataset explorer config"""
    pass

class DatasetLoadError(SubsidyBrowserError):
    """
    The JSON data file behind a dataset is missing or unparseable.
    Raised by the loader; the explorer never tries to recover from it.
    """
    pass

class UnknownSortKeyError(SubsidyBrowserError, KeyError):
    """Sort requested on a field the dataset does not declare as sortable"""
    pass
