"""filepathfilter Rules.

This module provides the include/exclude matching engine:
- Pattern compiler: gitignore-style pattern classification and matching
- Filter: allow/deny decisions and directory prefix pruning

Patterns are compiled once and are read-only afterwards.
"""

from .engine import Filter, ensure_filter, new, new_from_patterns
from .patterns import (
    DoubleWildcardPattern,
    NoOpPattern,
    PathfulWildcardPattern,
    PathlessWildcardPattern,
    PathPattern,
    PathPrefixPattern,
    Pattern,
    SimpleExtPattern,
    clean_path,
    convert_to_patterns,
    glob_match,
    new_pattern,
)

__all__ = [
    # Pattern compiler
    "Pattern",
    "NoOpPattern",
    "SimpleExtPattern",
    "DoubleWildcardPattern",
    "PathlessWildcardPattern",
    "PathfulWildcardPattern",
    "PathPrefixPattern",
    "PathPattern",
    "new_pattern",
    "convert_to_patterns",
    "clean_path",
    "glob_match",
    # Filter
    "Filter",
    "new",
    "new_from_patterns",
    "ensure_filter",
]
