#!/usr/bin/env python3
"""Gitignore-flavored pattern compilation and matching.

A raw pattern string is classified once, by :func:`new_pattern`, into one of
seven matcher variants. Every variant answers two questions about an already
cleaned path:

- ``match(name)``: does the pattern match this full path?
- ``has_prefix(name)``: could the pattern match something below this
  directory prefix? Used to prune a directory walk before descending.

``str(pattern)`` gives the canonical textual form of the rule.

Example:
    >>> p = new_pattern("build")
    >>> p.match("src/build/out.o")
    True
    >>> new_pattern("sub/*.txt").match("sub/dir/a.txt")
    False
"""

import fnmatch
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from filepathfilter.core.constants import GLOB_META_CHARS, LOCAL_DIR_PATTERNS, SEP, PatternKind
from filepathfilter.infrastructure.logger import get_logger

_ESCAPED_SEP = re.escape(SEP)
_ESCAPED_STAR = re.escape("*")
_ESCAPED_QUESTION = re.escape("?")
_NOT_SEP = f"[^{_ESCAPED_SEP}]"


def clean_path(path: str) -> str:
    """Return the shortest lexically equivalent form of ``path``.

    Redundant separators and ``.`` / ``..`` elements are collapsed and any
    trailing separator is removed. An empty path cleans to ``"."``.
    """
    cleaned = os.path.normpath(path) if path else "."
    # normpath keeps a leading double separator on POSIX
    if cleaned.startswith(SEP + SEP):
        cleaned = SEP + cleaned.lstrip(SEP)
    return cleaned


def glob_match(pattern: str, name: str) -> bool:
    """Single-segment glob match in which wildcards never cross a separator.

    ``*`` matches any run of non-separator characters, ``?`` one
    non-separator character, and ``[...]`` / ``[!...]`` / ``[^...]`` are
    character classes. Matching is case-sensitive.
    """
    pattern_parts = pattern.split(SEP)
    name_parts = name.split(SEP)
    if len(pattern_parts) != len(name_parts):
        return False

    if not all(_classes_closed(segment) for segment in pattern_parts):
        get_logger().debug("Malformed glob pattern", pattern=pattern)
        return False

    return all(
        fnmatch.fnmatchcase(part, segment.replace("[^", "[!"))
        for segment, part in zip(pattern_parts, name_parts)
    )


def _classes_closed(segment: str) -> bool:
    i = 0
    while i < len(segment):
        if segment[i] == "[":
            # A "]" right after the opening (or its negation) is a member.
            j = i + 1
            if j < len(segment) and segment[j] in "!^":
                j += 1
            j = segment.find("]", j + 1)
            if j < 0:
                return False
            i = j
        i += 1
    return True


def literal_prefix(pattern: str) -> str:
    """Return the part of ``pattern`` before its first glob metacharacter."""
    for i, char in enumerate(pattern):
        if char in GLOB_META_CHARS:
            return pattern[:i]
    return pattern


class Pattern(ABC):
    """A compiled, immutable include/exclude rule."""

    kind: PatternKind

    @abstractmethod
    def match(self, name: str) -> bool:
        """Return whether this rule matches the cleaned full path ``name``."""

    @abstractmethod
    def has_prefix(self, name: str) -> bool:
        """Return whether this rule could match a path below ``name``.

        For instance, a rule matching ``a/b/c.txt`` has the prefixes ``a``
        and ``a/b``.
        """

    @abstractmethod
    def __str__(self) -> str:
        """Return the canonical textual form of this rule."""


@dataclass(frozen=True)
class NoOpPattern(Pattern):
    """Local directory pattern (``.``, ``*``, ...); matches everything."""

    pattern: str = ""

    kind = PatternKind.NO_OP

    def match(self, name: str) -> bool:
        return True

    def has_prefix(self, name: str) -> bool:
        return True

    def __str__(self) -> str:
        return self.pattern


@dataclass(frozen=True)
class SimpleExtPattern(Pattern):
    """``*.ext``: matches any path ending in the extension, at any depth."""

    ext: str

    kind = PatternKind.SIMPLE_EXT

    def match(self, name: str) -> bool:
        return name.endswith(self.ext)

    def has_prefix(self, name: str) -> bool:
        return True

    def __str__(self) -> str:
        return f"*{self.ext}"


@dataclass(frozen=True)
class _WildcardRegexPattern(Pattern):
    raw_pattern: str
    wildcard_re: re.Pattern

    def __str__(self) -> str:
        return self.raw_pattern


@dataclass(frozen=True)
class DoubleWildcardPattern(_WildcardRegexPattern):
    """Pattern with a separator and ``**``; ``**`` may span directories.

    ``**/`` matches zero or more leading directories, so ``**/a.txt``
    matches ``a.txt`` as well as ``x/y/a.txt``.
    """

    kind = PatternKind.DOUBLE_WILDCARD

    def match(self, name: str) -> bool:
        return glob_match(self.raw_pattern, name) or self.wildcard_re.fullmatch(name) is not None

    def has_prefix(self, name: str) -> bool:
        lit = literal_prefix(self.raw_pattern)
        if not lit:
            return True
        # Either below the literal part, or a directory on the way to it.
        return name.startswith(lit) or lit.startswith(name + SEP)


@dataclass(frozen=True)
class PathlessWildcardPattern(_WildcardRegexPattern):
    """Wildcard pattern without a separator, matched against base names.

    A plain glob never lets ``*`` cross a separator, which is right for
    gitignore only when the pattern itself has one. ``test*`` must match
    ``test_a.py`` in any directory, so the base name is tested.
    """

    kind = PatternKind.PATHLESS_WILDCARD

    def match(self, name: str) -> bool:
        if glob_match(self.raw_pattern, name):
            return True
        return self.wildcard_re.fullmatch(os.path.basename(name)) is not None

    def has_prefix(self, name: str) -> bool:
        # Base names can match at any depth.
        return True


@dataclass(frozen=True)
class PathfulWildcardPattern(Pattern):
    """Pattern with ``*`` and a separator but no ``**``.

    Each ``*`` stays inside its directory component, so the pattern and the
    candidate are compared component by component.
    """

    wild_dirs: Tuple[str, ...]

    kind = PatternKind.PATHFUL_WILDCARD

    def match(self, name: str) -> bool:
        # Every segment must be used and the whole name consumed.
        if name.count(SEP) + 1 == len(self.wild_dirs) and self.partial(name) == name:
            return True
        return glob_match(str(self), name)

    def has_prefix(self, name: str) -> bool:
        # Anything matched so far leaves deeper paths plausible.
        return len(self.partial(name)) > 0

    def partial(self, name: str) -> str:
        """Return the leading components of ``name`` matched by this pattern.

        Matching stops at the first component that fails its segment, or
        that has no segment because ``name`` is deeper than the pattern.
        """
        components = name.split(SEP)
        for i, component in enumerate(components):
            if i >= len(self.wild_dirs) or not _match_component(self.wild_dirs[i], component):
                return SEP.join(components[:i])
        return name

    def __str__(self) -> str:
        return SEP.join(self.wild_dirs)


def _match_component(segment: str, component: str) -> bool:
    """Match one directory component against a ``*``-only segment.

    The text before the first ``*`` must prefix the component and the text
    after the last ``*`` must suffix what remains; pieces in between are
    consumed left to right.
    """
    pieces = segment.split("*")
    head, tail = pieces[0], pieces[-1]
    if len(pieces) == 1:
        return component == segment
    if not component.startswith(head):
        return False

    matched = len(head)
    for piece in pieces[1:-1]:
        index = component.find(piece, matched)
        if index < 0:
            return False
        matched = index + len(piece)

    return component[matched:].endswith(tail)


@dataclass(frozen=True)
class PathPrefixPattern(Pattern):
    """Pattern anchored at the root by a leading separator."""

    raw_pattern: str
    relative: str
    prefix: str

    kind = PatternKind.PATH_PREFIX

    def match(self, name: str) -> bool:
        if name == self.relative or name.startswith(self.prefix):
            return True
        return glob_match(self.raw_pattern, name)

    def has_prefix(self, name: str) -> bool:
        return self.relative.startswith(name)

    def __str__(self) -> str:
        return self.raw_pattern


@dataclass(frozen=True)
class PathPattern(Pattern):
    """Literal component or subpath, matched anywhere in the path."""

    raw_pattern: str
    prefix: str
    suffix: str
    inner: str

    kind = PatternKind.PATH

    def match(self, name: str) -> bool:
        if name.startswith(self.prefix) or name.endswith(self.suffix) or self.inner in name:
            return True
        return glob_match(self.raw_pattern, name)

    def has_prefix(self, name: str) -> bool:
        return self.prefix.startswith(name)

    def __str__(self) -> str:
        return self.raw_pattern


def _compile_wildcard(pattern: str, double: bool) -> re.Pattern:
    regex = re.escape(pattern)
    if double:
        regex = regex.replace(_ESCAPED_STAR * 2 + _ESCAPED_SEP, f"(?:.*{_ESCAPED_SEP})?")
        regex = regex.replace(_ESCAPED_STAR * 2, ".*")
        regex = regex.replace(_ESCAPED_STAR, _NOT_SEP + "*")
        regex = regex.replace(_ESCAPED_QUESTION, _NOT_SEP)
    else:
        regex = regex.replace(_ESCAPED_STAR, ".*")
    return re.compile(f"^{regex}$")


def new_pattern(raw_pattern: str) -> Pattern:
    """Compile a raw gitignore-style pattern.

    Every string compiles to some :class:`Pattern`; the result only depends
    on the input.

    Args:
        raw_pattern: Pattern as written in configuration

    Returns:
        The matcher variant for the pattern's shape
    """
    pattern = _classify(clean_path(raw_pattern))
    get_logger().debug("Compiled pattern", raw=raw_pattern, kind=pattern.kind.value)
    return pattern


def _classify(cleaned: str) -> Pattern:
    if cleaned in LOCAL_DIR_PATTERNS:
        return NoOpPattern(pattern=cleaned)

    has_sep = SEP in cleaned
    ext = os.path.splitext(cleaned)[1]
    if len(cleaned) > 1 and not has_sep and cleaned.startswith("*") and cleaned[1:] == ext:
        return SimpleExtPattern(ext=ext)

    if has_sep and "**" in cleaned:
        return DoubleWildcardPattern(
            raw_pattern=cleaned, wildcard_re=_compile_wildcard(cleaned, double=True)
        )

    if "*" in cleaned:
        if not has_sep:
            return PathlessWildcardPattern(
                raw_pattern=cleaned, wildcard_re=_compile_wildcard(cleaned, double=False)
            )
        return PathfulWildcardPattern(wild_dirs=tuple(cleaned.split(SEP)))

    if cleaned.startswith(SEP):
        relative = cleaned[len(SEP):].rstrip(SEP)
        return PathPrefixPattern(raw_pattern=cleaned, relative=relative, prefix=relative + SEP)

    return PathPattern(
        raw_pattern=cleaned,
        prefix=cleaned + SEP,
        suffix=SEP + cleaned,
        inner=SEP + cleaned + SEP,
    )


def convert_to_patterns(raw_patterns: Iterable[str]) -> List[Pattern]:
    """Compile each raw pattern, preserving order."""
    return [new_pattern(raw) for raw in raw_patterns]
