#!/usr/bin/env python3
"""Tests for the pattern compiler and matcher variants."""

import pytest

from filepathfilter.core.constants import PatternKind
from filepathfilter.rules.patterns import (
    DoubleWildcardPattern,
    NoOpPattern,
    PathfulWildcardPattern,
    PathlessWildcardPattern,
    PathPattern,
    PathPrefixPattern,
    SimpleExtPattern,
    clean_path,
    convert_to_patterns,
    glob_match,
    literal_prefix,
    new_pattern,
)


class TestCleanPath:
    """Tests for clean_path()."""

    def test_collapses_redundant_elements(self):
        """Test separators, '.' and '..' are collapsed."""
        assert clean_path("a//b/./c/../d") == "a/b/d"

    def test_strips_trailing_separator(self):
        """Test trailing separator is removed."""
        assert clean_path("build/") == "build"
        assert clean_path("/root/") == "/root"

    def test_leading_double_separator(self):
        """Test a leading '//' becomes a single separator."""
        assert clean_path("//root") == "/root"

    def test_empty_and_dot(self):
        """Test empty path and './' clean to '.'."""
        assert clean_path("") == "."
        assert clean_path("./") == "."


class TestGlobMatch:
    """Tests for glob_match()."""

    def test_star_does_not_cross_separator(self):
        """Test '*' stays inside one component."""
        assert glob_match("sub/*.txt", "sub/a.txt")
        assert not glob_match("sub/*.txt", "sub/dir/a.txt")
        assert not glob_match("*.txt", "dir/a.txt")

    def test_question_mark_and_classes(self):
        """Test '?' and character classes."""
        assert glob_match("a?c", "abc")
        assert not glob_match("a?c", "a/c")
        assert glob_match("file[0-9].log", "file7.log")
        assert not glob_match("file[!0-9].log", "file7.log")
        assert glob_match("file[^0-9].log", "fileX.log")

    def test_case_sensitive(self):
        """Test matching is case-sensitive."""
        assert not glob_match("README", "readme")

    @pytest.mark.parametrize("pattern", ["[abc", "a[", "x/[!", "[]"])
    def test_malformed_class_is_no_match(self, pattern):
        """Test an unclosed character class matches nothing, not even itself."""
        assert not glob_match(pattern, pattern)
        assert not glob_match(pattern, "a")

    def test_closing_bracket_as_member(self):
        """Test "]" directly after the opening bracket is a class member."""
        assert glob_match("[]a]", "]")
        assert glob_match("[!]]", "a")
        assert not glob_match("[!]]", "]")


class TestLiteralPrefix:
    """Tests for literal_prefix()."""

    def test_prefix(self):
        """Test text before the first metacharacter."""
        assert literal_prefix("src/**") == "src/"
        assert literal_prefix("src/a?/**") == "src/a"
        assert literal_prefix("**/a.txt") == ""
        assert literal_prefix("plain") == "plain"


class TestClassification:
    """Tests for new_pattern() variant selection."""

    @pytest.mark.parametrize("raw", ["*", "*.*", ".", "./", ".\\"])
    def test_local_dir_patterns(self, raw):
        """Test local directory patterns compile to no-op."""
        pattern = new_pattern(raw)
        assert isinstance(pattern, NoOpPattern)
        assert pattern.kind == PatternKind.NO_OP

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("*.txt", SimpleExtPattern),
            ("*.tar.gz", PathlessWildcardPattern),
            ("*_test.go", PathlessWildcardPattern),
            ("test*", PathlessWildcardPattern),
            ("**/a.txt", DoubleWildcardPattern),
            ("src/**", DoubleWildcardPattern),
            ("sub/*.txt", PathfulWildcardPattern),
            ("/root", PathPrefixPattern),
            ("/root/sub/", PathPrefixPattern),
            ("build", PathPattern),
            ("a/b", PathPattern),
        ],
    )
    def test_variants(self, raw, expected):
        """Test each pattern shape selects its variant."""
        assert type(new_pattern(raw)) is expected

    def test_deterministic(self):
        """Test compiling twice yields equal patterns."""
        for raw in ["*.txt", "src/**", "test*", "a*/b*", "/root", "build", "."]:
            assert new_pattern(raw) == new_pattern(raw)

    def test_convert_to_patterns_preserves_order(self):
        """Test list compilation keeps order."""
        patterns = convert_to_patterns(["build", "*.txt", "/root"])
        assert [str(p) for p in patterns] == ["build", "*.txt", "/root"]

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("*.txt", "*.txt"),
            ("./build/", "build"),
            ("src//**", "src/**"),
            ("sub/./*.txt", "sub/*.txt"),
            ("/root/", "/root"),
            ("./", "."),
        ],
    )
    def test_string_form(self, raw, expected):
        """Test str() returns the cleaned pattern."""
        assert str(new_pattern(raw)) == expected

    @pytest.mark.parametrize("raw", ["a(b)", "x+y", "file.txt", "a|b", "^$"])
    def test_literal_patterns_match_themselves(self, raw):
        """Test a pattern with no wildcards or anchors matches itself."""
        assert new_pattern(raw).match(raw)

    def test_regex_metacharacters_are_literal(self):
        """Test regex syntax in a wildcard pattern is escaped."""
        pattern = new_pattern("a+(b)*")
        assert pattern.match("a+(b)c")
        assert not pattern.match("aa(b)c")


class TestNoOpPattern:
    """Tests for NoOpPattern."""

    def test_matches_everything(self):
        """Test match and has_prefix are always true."""
        pattern = new_pattern(".")
        assert pattern.match("anything/at/all")
        assert pattern.has_prefix("docs")
        assert str(pattern) == "."

    def test_default_string_is_empty(self):
        """Test an unset no-op pattern renders as empty."""
        assert str(NoOpPattern()) == ""


class TestSimpleExtPattern:
    """Tests for SimpleExtPattern."""

    def test_matches_at_any_depth(self):
        """Test extension match anywhere."""
        pattern = new_pattern("*.txt")
        assert pattern.match("a.txt")
        assert pattern.match("dir/a.txt")
        assert pattern.match("dir/sub/a.txt")

    def test_rejects_other_extensions(self):
        """Test near-miss extensions."""
        pattern = new_pattern("*.txt")
        assert not pattern.match("a.txtx")
        assert not pattern.match("a.tx")

    def test_has_prefix_always(self):
        """Test any directory may contain a match."""
        assert new_pattern("*.txt").has_prefix("deep/dir")


class TestDoubleWildcardPattern:
    """Tests for DoubleWildcardPattern."""

    def test_leading_double_star(self):
        """Test '**/' matches zero or more directories."""
        pattern = new_pattern("**/a.txt")
        assert pattern.match("a.txt")
        assert pattern.match("x/a.txt")
        assert pattern.match("x/y/a.txt")
        assert not pattern.match("x/ba.txt")

    def test_trailing_double_star(self):
        """Test 'dir/**' matches everything below dir."""
        pattern = new_pattern("src/**")
        assert pattern.match("src/a.py")
        assert pattern.match("src/pkg/mod/a.py")
        assert not pattern.match("lib/src/a.py")

    def test_inner_double_star_with_single_star(self):
        """Test single '*' still stays inside one component."""
        pattern = new_pattern("src/**/*.py")
        assert pattern.match("src/a.py")
        assert pattern.match("src/x/y/a.py")
        assert not pattern.match("src/x/a.pyc")
        assert new_pattern("src/**/a?.py").match("src/x/ab.py")
        assert not new_pattern("src/**/a?.py").match("src/a/b.py")

    def test_has_prefix_with_literal(self):
        """Test pruning against the literal prefix."""
        pattern = new_pattern("src/**")
        assert pattern.has_prefix("src")
        assert pattern.has_prefix("src/pkg")
        assert not pattern.has_prefix("docs")
        assert not pattern.has_prefix("sr")

    def test_has_prefix_without_literal(self):
        """Test a pattern starting with '**' prunes nothing."""
        assert new_pattern("**/a.txt").has_prefix("anything")


class TestPathlessWildcardPattern:
    """Tests for PathlessWildcardPattern."""

    def test_matches_base_name_at_any_depth(self):
        """Test unanchored wildcard matches the last component."""
        pattern = new_pattern("test*")
        assert pattern.match("test_a.py")
        assert pattern.match("pkg/test_a.py")
        assert not pattern.match("pkg/a_test.py")

    def test_does_not_match_directory_component(self):
        """Test only the base name is considered."""
        assert not new_pattern("test*").match("tests/a.py")

    def test_question_mark_is_literal_below_top_level(self):
        """Test only "*" is a wildcard when matching a nested base name."""
        pattern = new_pattern("a?c*")
        assert pattern.match("abc.txt")
        assert not pattern.match("dir/abc.txt")
        assert pattern.match("dir/a?c.txt")

    def test_character_class_is_literal_below_top_level(self):
        """Test "[...]" behaves like "?" for nested base names."""
        pattern = new_pattern("[ab]x*")
        assert pattern.match("ax1")
        assert not pattern.match("dir/ax1")
        assert not new_pattern("?x*").match("dir/ax1")

    def test_has_prefix_always(self):
        """Test base-name patterns never prune directories."""
        assert new_pattern("test*").has_prefix("src")


class TestPathfulWildcardPattern:
    """Tests for PathfulWildcardPattern."""

    def test_match(self):
        """Test single '*' does not cross a separator."""
        pattern = new_pattern("sub/*.txt")
        assert pattern.match("sub/a.txt")
        assert not pattern.match("other/sub/a.txt")
        assert not pattern.match("sub/dir/a.txt")

    def test_directory_alone_is_not_a_match(self):
        """Test an ancestor directory is a prefix but not a match."""
        pattern = new_pattern("sub/*.txt")
        assert not pattern.match("sub")
        assert pattern.has_prefix("sub")

    def test_partial(self):
        """Test partial stops before the first failing component."""
        pattern = new_pattern("sub/*.txt")
        assert pattern.partial("sub/a.txt") == "sub/a.txt"
        assert pattern.partial("sub/dir/a.txt") == "sub"
        assert pattern.partial("other/a.txt") == ""
        assert pattern.partial("sub/a.txt/deeper") == "sub/a.txt"

    def test_has_prefix(self):
        """Test prefix plausibility."""
        pattern = new_pattern("sub/*.txt")
        assert pattern.has_prefix("sub")
        assert not pattern.has_prefix("other")

    def test_wildcard_directory(self):
        """Test '*' in a directory component."""
        pattern = new_pattern("pkg*/data/*.csv")
        assert pattern.match("pkg1/data/x.csv")
        assert pattern.has_prefix("pkg_a")
        assert pattern.has_prefix("pkg_a/data")
        assert not pattern.has_prefix("lib")
        assert not pattern.match("pkg1/other/x.csv")

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("d/abc", True),
            ("d/axbyc", True),
            ("d/abbc", True),
            ("d/ab", False),
            ("d/acb", False),
            ("d/bac", False),
            ("d/abcx", False),
        ],
    )
    def test_multiple_wildcards_in_component(self, name, expected):
        """Test components with several '*' wildcards."""
        assert new_pattern("d/a*b*c").match(name) is expected

    def test_suffix_does_not_overlap_prefix(self):
        """Test the suffix is matched after the consumed prefix."""
        pattern = new_pattern("d/a*ab")
        assert not pattern.match("d/ab")
        assert pattern.match("d/aab")

    def test_question_mark_via_glob(self):
        """Test '?' in a pathful pattern matches through the glob fallback."""
        assert new_pattern("d?/*.txt").match("d1/a.txt")

    def test_string_round_trip(self):
        """Test str() rejoins the components."""
        assert str(new_pattern("a*/b/*c")) == "a*/b/*c"


class TestPathPrefixPattern:
    """Tests for PathPrefixPattern."""

    def test_match(self):
        """Test anchored match."""
        pattern = new_pattern("/root")
        assert pattern.match("root")
        assert pattern.match("root/child")
        assert not pattern.match("other/root")
        assert not pattern.match("rootx")

    def test_fields(self):
        """Test relative and prefix are derived from the cleaned pattern."""
        pattern = new_pattern("/root/sub/")
        assert pattern.relative == "root/sub"
        assert pattern.prefix == "root/sub/"
        assert str(pattern) == "/root/sub"

    def test_has_prefix(self):
        """Test ancestors of the anchored target are prefixes."""
        pattern = new_pattern("/root/sub")
        assert pattern.has_prefix("root")
        assert pattern.has_prefix("root/sub")
        assert not pattern.has_prefix("other")


class TestPathPattern:
    """Tests for PathPattern."""

    def test_matches_component_anywhere(self):
        """Test plain pattern matches as a component at any depth."""
        pattern = new_pattern("build")
        assert pattern.match("build")
        assert pattern.match("build/output")
        assert pattern.match("src/build")
        assert pattern.match("src/build/output")
        assert not pattern.match("buildx")
        assert not pattern.match("src/xbuild")

    def test_subpath(self):
        """Test a multi-component literal pattern."""
        pattern = new_pattern("a/b")
        assert pattern.match("a/b")
        assert pattern.match("x/a/b/c")
        assert not pattern.match("a/bc")

    def test_has_prefix(self):
        """Test the pattern's own prefix."""
        pattern = new_pattern("build")
        assert pattern.has_prefix("build")
        assert pattern.has_prefix("bu")
        assert not pattern.has_prefix("src")
