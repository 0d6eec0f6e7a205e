"""filepathfilter - gitignore-style include/exclude path filtering.

Example:
    >>> from filepathfilter import Filter
    >>> f = Filter.from_strings(include=["src/**"], exclude=["*.pyc"])
    >>> f.allows("src/app/main.py"), f.has_prefix("docs")
    (True, False)
"""

from filepathfilter.core.constants import FILEPATHFILTER_VERSION
from filepathfilter.rules import (
    Filter,
    Pattern,
    clean_path,
    ensure_filter,
    glob_match,
    new,
    new_from_patterns,
    new_pattern,
)

__version__ = FILEPATHFILTER_VERSION

__all__ = [
    "Filter",
    "Pattern",
    "new",
    "new_from_patterns",
    "new_pattern",
    "ensure_filter",
    "clean_path",
    "glob_match",
]
