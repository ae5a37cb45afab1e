"""
Unit tests for the built-in matcher self-test.
"""

import io
from unittest.mock import patch

from fuzzyfind.tools.selftest import MATCHER_CASES, MatcherCase, run_self_test


class TestSelfTest:
    """Test cases for run_self_test."""

    def test_all_cases_pass(self):
        out = io.StringIO()

        assert run_self_test(out) == 0
        assert out.getvalue().count(".") >= len(MATCHER_CASES)
        assert f"{len(MATCHER_CASES)} tests, 0 failed" in out.getvalue()

    def test_reports_failures(self):
        cases = [MatcherCase("foo", "foo", 3), MatcherCase("foo", "bar", 3)]
        out = io.StringIO()

        with patch("fuzzyfind.tools.selftest.MATCHER_CASES", cases):
            assert run_self_test(out) == 1

        assert 'test 2 -- query: "foo", path: "bar", expected 3, got 0' in out.getvalue()
        assert "2 tests, 1 failed" in out.getvalue()
