"""
Unit tests for the fuzzy character matcher.

Covers scattered (subsequence) matching, consecutive runs delimited by the
toggle character, and the fixed reference corpus.
"""

import pytest

from fuzzyfind.models.config import SearchConfig
from fuzzyfind.tools.matcher import Matcher, match_chars
from fuzzyfind.tools.selftest import MATCHER_CASES


def greedy_prefix(query: str, name: str) -> int:
    """Length of the longest prefix of query that is a subsequence of name."""
    matched = 0
    for c in name:
        if matched < len(query) and c == query[matched]:
            matched += 1
    return matched


class TestReferenceCorpus:
    """The reference corpus must hold exactly."""

    @pytest.mark.parametrize("case", MATCHER_CASES, ids=lambda c: f"{c.query}|{c.name}")
    def test_case(self, case):
        result = match_chars(case.name, case.query, 0, case_insensitive=case.case_insensitive)
        assert result == case.expected


class TestScatteredMatching:
    """Test cases for queries without the toggle character."""

    @pytest.mark.parametrize("query,name", [
        ("foo", "afbocod"),
        ("main", "main.c"),
        ("mc", "main.c"),
        ("mc", "util.c"),
        ("xyz", "abc"),
        ("abc", "cba"),
        ("aa", "a"),
    ])
    def test_matches_greedy_subsequence_prefix(self, query, name):
        """Test that the end cursor equals the greedy subsequence prefix length."""
        assert match_chars(name, query) == greedy_prefix(query, name)

    def test_empty_name_returns_start_cursor(self):
        assert match_chars("", "foo", 0) == 0
        assert match_chars("", "foo", 2) == 2

    def test_cursor_at_end_is_unchanged(self):
        """Test that a fully satisfied query stays satisfied."""
        assert match_chars("anything", "foo", 3) == 3

    def test_resumes_from_start_cursor(self):
        """Test matching continues from the cursor handed down by a parent."""
        assert match_chars("main.c", "s/mc", 2) == 4
        assert match_chars("util.c", "s/mc", 2) == 2

    def test_stops_at_query_end(self):
        """Test that extra name characters after a full match are ignored."""
        assert match_chars("foofoofoo", "foo") == 3

    def test_case_sensitive_by_default(self):
        assert match_chars("FOO", "foo") == 0

    def test_case_insensitive_keeps_multi_character_lowercase(self):
        assert match_chars("a\u0130b", "\u0130b", case_insensitive=True) == 2

    def test_case_insensitive_lowers_name(self):
        assert match_chars("FoO", "foo", case_insensitive=True) == 3

    def test_segment_separator_is_not_matched_by_name(self):
        """Test that a '/' in the query halts progress within one name."""
        assert match_chars("srcmc", "s/mc") == 1

    def test_idempotent(self):
        results = {match_chars("abefijopuv", "a=eio=u", 0) for _ in range(5)}
        assert results == {1}


class TestConsecutiveRuns:
    """Test cases for consecutive-run matching."""

    def test_run_matches_contiguous_characters(self):
        assert match_chars("xxfooxx", "=foo=") == 5

    def test_run_rejects_scattered_characters(self):
        assert match_chars("fxoxo", "=foo=") == 0

    def test_run_retried_later_in_name(self):
        """Test that a broken run is retried at later name positions."""
        assert match_chars("fxfoo", "=foo") == 4

    def test_breaking_character_does_not_restart_run(self):
        """Test that the retry starts after the character that broke the run."""
        assert match_chars("fofoo", "=foo") == 0

    def test_run_broken_by_end_of_name_rolls_back(self):
        assert match_chars("xfo", "x=foo") == 1

    def test_scattered_after_run(self):
        assert match_chars("foo-x-y", "=foo=y") == 6

    def test_custom_toggle_character(self):
        assert match_chars("foobar", "f+oob+r", conseq_char='+') == 7
        assert match_chars("f=oob=r", "f=oob=r", conseq_char='+') == 7

    def test_case_insensitive_run(self):
        assert match_chars("xFOOx", "=foo=", case_insensitive=True) == 5


class TestMatcher:
    """Test cases for the config-bound Matcher."""

    def test_uses_config_query_and_toggle(self):
        config = SearchConfig(query="a+cdef+hj", root="/", conseq_char='+')
        matcher = Matcher(config)
        assert matcher.match("abcdefghijk") == 9
        assert matcher.match("abcefghijk") == 1

    def test_case_insensitive_config(self):
        config = SearchConfig(query="FOO", root="/", case_insensitive=True)
        matcher = Matcher(config)
        assert config.query == "foo"
        assert matcher.match("aFbOcOd") == 3

    def test_start_cursor(self):
        matcher = Matcher(SearchConfig(query="s/mc", root="/"))
        assert matcher.match("main.c", 2) == 4
