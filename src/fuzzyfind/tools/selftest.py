"""
Built-in matcher self-test, run with `ff -t`.
"""

import sys
from typing import List, NamedTuple, Optional, TextIO

from .matcher import match_chars


class MatcherCase(NamedTuple):
    query: str
    name: str
    expected: int
    case_insensitive: bool = False


MATCHER_CASES: List[MatcherCase] = [
    MatcherCase("foo", "afbocod", 3),
    MatcherCase("foo", "aFbOcOd", 3, case_insensitive=True),
    MatcherCase("=foo", "foo", 4),            # leading toggle
    MatcherCase("=foo=a", "foobar", 6),
    MatcherCase("=foo=a", "oobar", 0),        # sticks at the unmatched =foo= run
    MatcherCase("f=oob=r", "foobar", 7),
    MatcherCase("f=oob=rx", "foobar", 7),
    MatcherCase("=", "foo", 1),
    MatcherCase("==", "foo", 2),
    MatcherCase("f=", "foo", 2),              # trailing toggles
    MatcherCase("f==", "foo", 3),
    MatcherCase("==f", "foo", 3),
    MatcherCase("z==", "foo", 0),
    MatcherCase("aeiou", "abefijopuv", 5),
    MatcherCase("a=eio=u", "abefijopuv", 1),  # sticks at a, =eio= never matches
    MatcherCase("a=cdef=hj", "abcdefghijk", 9),
    MatcherCase("a=cdef=hj", "abcefghijk", 1),
]


def run_self_test(out: Optional[TextIO] = None) -> int:
    """
    Run every matcher case, printing a dot per pass and a line per failure.

    Returns:
        Number of failed cases
    """
    out = out or sys.stdout
    failed = 0
    for number, case in enumerate(MATCHER_CASES, start=1):
        result = match_chars(case.name, case.query, 0, case_insensitive=case.case_insensitive)
        if result != case.expected:
            failed += 1
            out.write(f'\ntest {number} -- query: "{case.query}", path: "{case.name}", '
                      f'expected {case.expected}, got {result}\n')
        else:
            out.write(".")
    out.write(f"\n{len(MATCHER_CASES)} tests, {failed} failed\n")
    return failed
