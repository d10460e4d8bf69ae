"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Compiled glob patterns for broadcast path matching.

Dialect:
  - `*` matches any run of characters, `/` included.
  - `**` matches anything and must form a whole path segment. A `**/`
    segment may also match zero directories (`**/b` matches `b`).
  - `?` matches exactly one character.
  - `[abc]`, `[a-z]` and `[!abc]` match one character from (or not from) a set.

Patterns are validated and compiled once; matching is case-sensitive and
anchored to the whole path.
"""

from __future__ import annotations

import fnmatch
import itertools
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..errors import PatternCompileError

logger = logging.getLogger("relaycache.policy")

MATCH_EVERYTHING = "**"


@dataclass(frozen=True, slots=True)
class GlobPattern:
    """One validated glob pattern with its precompiled regex variants."""

    source: str
    _regexes: tuple[re.Pattern[str], ...] = field(
        default=(), repr=False, compare=False
    )

    @classmethod
    def compile(cls, pattern: str) -> GlobPattern:
        """
        Validate and compile `pattern`.

        Raises:
            PatternCompileError: When the pattern is malformed.
        """
        if not isinstance(pattern, str):
            raise PatternCompileError(repr(pattern), "pattern must be a string")
        _validate(pattern)
        regexes = tuple(
            re.compile(fnmatch.translate(variant))
            for variant in _expand_recursive_segments(pattern)
        )
        return cls(source=pattern, _regexes=regexes)

    def matches(self, path: str) -> bool:
        return any(regex.match(path) is not None for regex in self._regexes)

    def __str__(self) -> str:
        return self.source


def compile_patterns(patterns: Iterable[str]) -> tuple[GlobPattern, ...]:
    """Compile every pattern, failing on the first malformed one."""
    if isinstance(patterns, str):
        # A bare string would otherwise compile one pattern per character.
        raise PatternCompileError(patterns, "expected a list of patterns, got a string")
    compiled: list[GlobPattern] = []
    for pattern in patterns:
        try:
            compiled.append(GlobPattern.compile(pattern))
        except PatternCompileError as exc:
            logger.warning("Rejected cache pattern %r: %s", exc.pattern, exc.reason)
            raise
    return tuple(compiled)


def matches_any(path: str, patterns: Iterable[GlobPattern]) -> bool:
    return any(pattern.matches(path) for pattern in patterns)


def _validate(pattern: str) -> None:
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            # A leading `]` is a literal member of the set.
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close < 0:
                raise PatternCompileError(pattern, "unterminated character class")
            i = close + 1
            continue
        if ch == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            run = j - i
            if run > 2:
                raise PatternCompileError(
                    pattern, "wildcards are either regular `*` or recursive `**`"
                )
            if run == 2:
                starts_segment = i == 0 or pattern[i - 1] == "/"
                ends_segment = j == n or pattern[j] == "/"
                if not (starts_segment and ends_segment):
                    raise PatternCompileError(
                        pattern,
                        "recursive wildcards must form a single path component",
                    )
            i = j
            continue
        i += 1


def _expand_recursive_segments(pattern: str) -> list[str]:
    """
    Return `pattern` plus every variant with non-final `**` segments dropped.

    `fnmatch` renders `**/` as `.*/`, which needs at least one directory;
    the dropped variants cover the zero-directory case.
    """
    segments = pattern.split("/")
    optional = [
        idx
        for idx, segment in enumerate(segments[:-1])
        if segment == MATCH_EVERYTHING
    ]
    if not optional:
        return [pattern]

    variants: list[str] = []
    for keep_flags in itertools.product((True, False), repeat=len(optional)):
        dropped = {idx for idx, keep in zip(optional, keep_flags) if not keep}
        variant = "/".join(
            segment for idx, segment in enumerate(segments) if idx not in dropped
        )
        if variant not in variants:
            variants.append(variant)
    return variants
