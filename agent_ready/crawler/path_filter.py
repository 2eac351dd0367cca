# agent_ready/crawler/path_filter.py
"""
Glob-style include/exclude filtering of URL paths.

Pattern syntax: ``**`` matches any characters including ``/``, ``*`` any
characters except ``/``, everything else is literal. A ``/**`` segment may
also match nothing, so ``/docs/**`` covers ``/docs`` itself. The whole path
must match.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Union

__all__ = ("GlobMatcher", "PathFilter", "compile_glob", "matches")


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a path glob into an anchored regular expression."""
    if not pattern:
        raise ValueError("empty path pattern")
    if not pattern.startswith(("/", "*")):
        raise ValueError(f"path pattern must start with '/' or '*': {pattern!r}")

    out: List[str] = []
    i, n = 0, len(pattern)
    while i < n:
        if pattern.startswith("/**", i) and (i + 3 == n or pattern[i + 3] == "/"):
            out.append("(?:/.*)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(out))


class GlobMatcher:
    """A path glob compiled once and matched many times."""

    __slots__ = ("pattern", "_regex")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._regex = compile_glob(pattern)

    def matches(self, pathname: str) -> bool:
        return self._regex.fullmatch(pathname) is not None

    def __repr__(self) -> str:
        return f"GlobMatcher({self.pattern!r})"


_PatternT = Union[str, GlobMatcher]


def _matchers(patterns: Iterable[_PatternT]) -> List[GlobMatcher]:
    return [p if isinstance(p, GlobMatcher) else GlobMatcher(p) for p in patterns]


def matches(pathname: str, patterns: Iterable[_PatternT]) -> bool:
    """Return True if *pathname* matches at least one of *patterns*."""
    return any(m.matches(pathname) for m in _matchers(patterns))


class PathFilter:
    """Allow-list (*include*) followed by deny-list (*exclude*) over URL paths."""

    def __init__(self, include: Sequence[_PatternT] = (), exclude: Sequence[_PatternT] = ()) -> None:
        self.include = _matchers(include)
        self.exclude = _matchers(exclude)

    def allows(self, pathname: str) -> bool:
        if self.include and not matches(pathname, self.include):
            return False
        if self.exclude and matches(pathname, self.exclude):
            return False
        return True
