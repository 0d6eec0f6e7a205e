"""filepathfilter Core - Shared constants and validation.

Import specific names from submodules:
    from filepathfilter.core.constants import ErrorCode, SEP
    from filepathfilter.core.validators import ValidationError, validate_pattern
"""

from filepathfilter.core import constants, validators

__all__ = [
    "constants",
    "validators",
]
