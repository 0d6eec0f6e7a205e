#!/usr/bin/env python3
"""Include/exclude filter over compiled patterns.

This module provides the decision logic used while walking a tree:
- Include patterns are tried in order; the first match wins
- Exclude patterns override a matching include
- Directory prefixes can be pruned before descending

Example:
    >>> f = Filter.from_strings(include=["*.go"], exclude=["*_test.go"])
    >>> f.allows("main.go")
    True
    >>> f.allows_pattern("main_test.go")
    ('*_test.go', False)
"""

from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from filepathfilter.core.constants import SEP, ConfigKey
from filepathfilter.infrastructure.logger import get_logger
from filepathfilter.rules.patterns import Pattern, clean_path, convert_to_patterns

if TYPE_CHECKING:
    from filepathfilter.infrastructure.config_manager import ConfigManager


class Filter:
    """Ordered include and exclude patterns.

    A filter with no patterns at all allows every path and every prefix; see
    :meth:`allow_all` and :func:`ensure_filter`. Filters are never mutated
    after construction and can be shared between threads.
    """

    def __init__(
        self,
        include: Optional[Sequence[Pattern]] = None,
        exclude: Optional[Sequence[Pattern]] = None,
    ):
        """Initialize filter from compiled patterns.

        Args:
            include: Patterns a path must match one of, in priority order
            exclude: Patterns that reject a path, in priority order
        """
        self._include: Tuple[Pattern, ...] = tuple(include or ())
        self._exclude: Tuple[Pattern, ...] = tuple(exclude or ())

        get_logger().debug(
            "Created filter", include=len(self._include), exclude=len(self._exclude)
        )

    @classmethod
    def from_strings(
        cls, include: Optional[Iterable[str]] = None, exclude: Optional[Iterable[str]] = None
    ) -> "Filter":
        """Compile raw pattern strings into a filter.

        Args:
            include: Raw include patterns
            exclude: Raw exclude patterns

        Returns:
            New filter
        """
        return cls(convert_to_patterns(include or ()), convert_to_patterns(exclude or ()))

    @classmethod
    def from_config(cls, config: "ConfigManager") -> "Filter":
        """Build a filter from the ``filter`` section of a configuration.

        Raises:
            ConfigError: If either pattern list is invalid
        """
        return cls.from_strings(
            config.get_patterns(ConfigKey.INCLUDE), config.get_patterns(ConfigKey.EXCLUDE)
        )

    @classmethod
    def allow_all(cls) -> "Filter":
        """Return a filter without patterns, allowing everything."""
        return cls()

    def include(self) -> List[str]:
        """Return the string form of each include pattern."""
        return [str(p) for p in self._include]

    def exclude(self) -> List[str]:
        """Return the string form of each exclude pattern."""
        return [str(p) for p in self._exclude]

    def allows(self, path: str) -> bool:
        """Return whether ``path`` passes the filter."""
        _, allowed = self.allows_pattern(path)
        return allowed

    def allows_pattern(self, path: str) -> Tuple[str, bool]:
        """Return whether ``path`` passes, and the pattern that decided it.

        The pattern is the matching include pattern when the path is allowed
        and the matching exclude pattern when it is rejected. It is the empty
        string when the filter has no patterns, when there are no include
        patterns and the path is allowed, or when no include pattern matched.

        Args:
            path: Path relative to the walk root

        Returns:
            Tuple of (pattern string, allowed)
        """
        if not self._include and not self._exclude:
            return "", True

        cleaned = clean_path(path)
        pattern = ""

        if self._include:
            for inc in self._include:
                if inc.match(cleaned):
                    pattern = str(inc)
                    break
            else:
                get_logger().debug("No include pattern matched", path=cleaned)
                return "", False

        for exc in self._exclude:
            if exc.match(cleaned):
                get_logger().debug("Excluded", path=cleaned, pattern=str(exc))
                return str(exc), False

        return pattern, True

    def has_prefix(self, prefix: str) -> bool:
        """Return whether anything below directory ``prefix`` could be allowed.

        Ancestors of ``prefix`` are visited from the longest to the shortest.
        An exclude pattern matching any of them rejects the whole subtree;
        otherwise the first ancestor for which an include pattern reports a
        possible match allows it.

        Args:
            prefix: Directory path relative to the walk root

        Returns:
            False when the subtree can be skipped
        """
        parts = prefix.split(SEP)

        for i in range(len(parts), 0, -1):
            ancestor = SEP.join(parts[:i])

            if any(exc.match(ancestor) for exc in self._exclude):
                get_logger().debug("Pruned excluded prefix", prefix=prefix, ancestor=ancestor)
                return False

            if not self._include:
                return True

            if any(inc.has_prefix(ancestor) for inc in self._include):
                return True

        return False

    def __len__(self) -> int:
        """Return total number of patterns."""
        return len(self._include) + len(self._exclude)

    def __bool__(self) -> bool:
        """Return True if any patterns are configured."""
        return bool(self._include or self._exclude)

    def __repr__(self) -> str:
        return f"Filter(include={self.include()!r}, exclude={self.exclude()!r})"


def new(include: Optional[Iterable[str]] = None, exclude: Optional[Iterable[str]] = None) -> Filter:
    """Compile raw include and exclude patterns into a filter."""
    return Filter.from_strings(include, exclude)


def new_from_patterns(
    include: Optional[Sequence[Pattern]] = None, exclude: Optional[Sequence[Pattern]] = None
) -> Filter:
    """Build a filter from already compiled patterns."""
    return Filter(include, exclude)


def ensure_filter(filter_: Optional[Filter]) -> Filter:
    """Return ``filter_``, or a filter allowing everything when it is None."""
    if filter_ is None:
        return Filter.allow_all()
    return filter_
