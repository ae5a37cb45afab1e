"""
Fuzzy character matcher for the fuzzy finder.

The matcher advances a cursor through the query while scanning a single
path component. Query characters are matched as a subsequence of the name,
except inside consecutive runs: a span opened by the toggle character
(default '=') must match contiguous characters of the name. A run that
breaks rolls the cursor back to the toggle character and is retried one
name position later.

For example, "aeiou" matches all of "abefijopuv", but "a=eio=u" stops
after the "a".
"""

from typing import Optional

from ..models.config import SearchConfig, fold_case


def match_chars(name: str, query: str, cursor: int = 0,
                conseq_char: str = '=', case_insensitive: bool = False) -> int:
    """
    Match the characters of name against query starting at cursor.

    Args:
        name: Candidate path component
        query: Query pattern, already lowercased for case-insensitive matching
        cursor: Query offset to start from
        conseq_char: Character toggling consecutive-run matching
        case_insensitive: Lowercase name characters before comparing

    Returns:
        The query offset reached after consuming name
    """
    query_len = len(query)
    name_len = len(name)
    i = 0
    # Query offset of the toggle that opened the current run, None while scattered
    run_start: Optional[int] = None

    while cursor < query_len:
        if run_start is None:
            if i == name_len:
                break
            if query[cursor] == conseq_char:
                run_start = cursor
                cursor += 1
                continue
            c = fold_case(name[i]) if case_insensitive else name[i]
            i += 1
            if c == query[cursor]:
                cursor += 1
        else:
            if query[cursor] == conseq_char:
                # run closed
                run_start = None
                cursor += 1
                continue
            if i == name_len:
                cursor = run_start
                break
            c = fold_case(name[i]) if case_insensitive else name[i]
            i += 1
            if c != query[cursor]:
                cursor = run_start
                run_start = None
                continue
            cursor += 1

    return cursor


class Matcher:
    """Matches path components against the query of a SearchConfig."""

    def __init__(self, config: SearchConfig):
        self.config = config

    def match(self, name: str, cursor: int = 0) -> int:
        return match_chars(
            name,
            self.config.query,
            cursor,
            conseq_char=self.config.conseq_char,
            case_insensitive=self.config.case_insensitive,
        )
