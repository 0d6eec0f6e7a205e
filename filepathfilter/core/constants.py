"""
filepathfilter Core: Constants and Type Definitions

This module provides package-wide constants and error codes shared by the pattern compiler, the filter and the configuration layer.
"""
import os
from enum import Enum, IntEnum
from typing import FrozenSet

# Version information
FILEPATHFILTER_VERSION = "1.0.0"


# Error codes
class ErrorCode(IntEnum):
    """Standardized error codes for filepathfilter operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad pattern, invalid configuration
    NOT_FOUND = 2  # Config file doesn't exist
    INTERNAL_ERROR = 6  # Bug in filepathfilter


# Host path separator; patterns and queried paths are normalized to it.
SEP = os.sep

# Patterns that refer to the local directory and therefore match everything.
LOCAL_DIR_PATTERNS: FrozenSet[str] = frozenset({"*", "*.*", ".", "./", ".\\"})

# Characters that start a glob expression inside a pattern.
GLOB_META_CHARS = "*?["


class PatternKind(Enum):
    """Matcher variant selected by the pattern compiler."""

    NO_OP = "no_op"  # Local directory, matches everything
    SIMPLE_EXT = "simple_ext"  # *.ext
    DOUBLE_WILDCARD = "double_wildcard"  # dir/**/name
    PATHLESS_WILDCARD = "pathless_wildcard"  # test*
    PATHFUL_WILDCARD = "pathful_wildcard"  # sub/*.txt
    PATH_PREFIX = "path_prefix"  # /anchored/path
    PATH = "path"  # plain component or subpath


class FilterKind(Enum):
    """The two pattern lists held by a filter."""

    INCLUDE = "include"
    EXCLUDE = "exclude"


# Resource limits
class Limits:
    """Input limits enforced by the validators."""

    MAX_PATTERN_LENGTH = 4096
    MAX_PATTERNS = 10000


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    ROOT = "filepathfilter"
    FILTER = "filter"
    LOGGING = "logging"

    INCLUDE = FilterKind.INCLUDE.value
    EXCLUDE = FilterKind.EXCLUDE.value
    LEVEL = "level"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.FILTER: {
            ConfigKey.INCLUDE: [],
            ConfigKey.EXCLUDE: [],
        },
        ConfigKey.LOGGING: {
            ConfigKey.LEVEL: "WARNING",
        },
    }
}
