"""Restricted glob matching for ignore patterns.

Supported syntax:
- ``**`` matches any sequence, including ``/``
- ``*`` matches any sequence except ``/``
- ``?`` matches exactly one character
- ``[...]`` character classes are passed through
Every other character, dots included, matches literally.

Two anchoring modes exist because the two resolution paths compare
different strings: FULL anchors both ends, PREFIX anchors only the
start so that a pattern also matches everything below a matched prefix.
"""

import logging
import re
from collections.abc import Iterable
from enum import Enum
from functools import lru_cache

logger = logging.getLogger(__name__)


class GlobAnchor(str, Enum):
    """How a compiled pattern is anchored against the candidate path."""

    FULL = "full"
    PREFIX = "prefix"


def translate(pattern: str) -> str:
    """Translate a glob pattern into an unanchored regular expression.

    Args:
        pattern: Glob pattern.

    Returns:
        Regular expression source.
    """
    parts: list[str] = []
    index = 0
    length = len(pattern)

    while index < length:
        char = pattern[index]
        if char == "*":
            if pattern.startswith("**", index):
                parts.append(".*")
                index += 2
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append(".")
        elif char == "[":
            # Copied verbatim; an unterminated class fails compilation
            end = pattern.find("]", index + 1)
            if end == -1:
                parts.append(pattern[index:])
                break
            if pattern.startswith("[!", index):
                parts.append("[^" + pattern[index + 2 : end + 1])
            else:
                parts.append(pattern[index : end + 1])
            index = end + 1
            continue
        else:
            parts.append(re.escape(char))
        index += 1

    return "".join(parts)


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str, anchor: GlobAnchor = GlobAnchor.FULL) -> re.Pattern[str] | None:
    """Compile a glob pattern into an anchored regular expression.

    Args:
        pattern: Glob pattern.
        anchor: Anchoring mode.

    Returns:
        Compiled pattern, or None if the pattern is invalid.
    """
    source = "^" + translate(pattern)
    if anchor is GlobAnchor.FULL:
        source += "$"
    try:
        return re.compile(source)
    except re.error as e:
        logger.warning("Invalid ignore pattern %r: %s", pattern, e)
        return None


def matches(path: str, pattern: str, anchor: GlobAnchor = GlobAnchor.FULL) -> bool:
    """Check whether a path matches a glob pattern.

    Args:
        path: Candidate path.
        pattern: Glob pattern.
        anchor: Anchoring mode.

    Returns:
        True on match; False for invalid patterns.
    """
    compiled = compile_pattern(pattern, anchor)
    return compiled is not None and compiled.match(path) is not None


def should_ignore(path: str, patterns: Iterable[str], anchor: GlobAnchor = GlobAnchor.FULL) -> bool:
    """Check whether any pattern matches a path.

    Args:
        path: Candidate path.
        patterns: Active ignore patterns.
        anchor: Anchoring mode.

    Returns:
        True if at least one valid pattern matches.
    """
    return any(matches(path, pattern, anchor) for pattern in patterns)
