"""
filepathfilter Core: Input Validators.

This module validates pattern lists coming from configuration before they are
handed to the pattern compiler. The compiler itself accepts any string; these
checks exist to report bad configuration early with a useful message.
"""
from typing import Any, List

from filepathfilter.core.constants import ErrorCode, Limits


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_pattern(pattern: Any) -> bool:
    """Validate a single include/exclude pattern.

    Args:
        pattern: Pattern to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If pattern is invalid
    """
    if not isinstance(pattern, str):
        raise ValidationError(f"Pattern must be string, got {type(pattern).__name__}")

    if not pattern:
        raise ValidationError("Pattern cannot be empty")

    # Check length
    if len(pattern) > Limits.MAX_PATTERN_LENGTH:
        raise ValidationError(f"Pattern exceeds maximum length ({Limits.MAX_PATTERN_LENGTH})")

    # Check for null bytes
    if "\0" in pattern:
        raise ValidationError("Invalid pattern: contains null bytes")

    # Check for control characters
    if any(ord(c) < 32 for c in pattern):
        raise ValidationError("Invalid pattern: contains control characters")

    return True


def validate_pattern_list(patterns: Any, name: str = "patterns") -> List[str]:
    """Validate a list of patterns.

    A single string is accepted and wrapped into a one-element list; ``None``
    means no patterns.

    Args:
        patterns: List of pattern strings
        name: Label used in error messages (e.g. "include")

    Returns:
        The validated patterns as a new list

    Raises:
        ValidationError: If the value is not a list of valid patterns
    """
    if patterns is None:
        return []

    if isinstance(patterns, str):
        patterns = [patterns]

    if not isinstance(patterns, (list, tuple)):
        raise ValidationError(f"{name} must be a list, got {type(patterns).__name__}")

    if len(patterns) > Limits.MAX_PATTERNS:
        raise ValidationError(f"{name} exceeds maximum pattern count ({Limits.MAX_PATTERNS})")

    for i, pattern in enumerate(patterns):
        try:
            validate_pattern(pattern)
        except ValidationError as e:
            raise ValidationError(f"Invalid {name} pattern at index {i}: {e}")

    return list(patterns)
