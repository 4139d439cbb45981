"""Ignore-spec resolution.

Walks a .chezmoiignore file whose pattern lines are wrapped in
template conditionals and returns the patterns that are active for a
configuration and target platform.

Example input::

    {{- if not (eq .chezmoi.os "windows") }}
    .config/powershell/**
    {{- end }}
    {{- if not .modules.vscode.enabled }}
    .config/Code/**
    {{- end }}
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from dotviz.core.conditions import evaluate

if TYPE_CHECKING:
    from dotviz.models.config import DotfilesConfig, Platform

logger = logging.getLogger(__name__)

# A single {{ ... }} action, whitespace-trim dashes optional on either side
_DIRECTIVE_RE = re.compile(r"\{\{-?\s*(?P<body>.*?)\s*-?\}\}", re.DOTALL)
_IF_RE = re.compile(r"if(?:\s+(?P<expr>.*))?", re.IGNORECASE | re.DOTALL)
_ELSE_IF_RE = re.compile(r"else\s+if(?:\s+(?P<expr>.*))?", re.IGNORECASE | re.DOTALL)
_ELSE_RE = re.compile(r"else", re.IGNORECASE)
_END_RE = re.compile(r"end", re.IGNORECASE)

COMMENT_PREFIX = "#"
DIRECTIVE_PREFIX = "{{"


class DirectiveKind(Enum):
    """Kind of conditional block marker."""

    IF = "if"
    ELSE_IF = "else_if"
    ELSE = "else"
    END = "end"


@dataclass(frozen=True, slots=True)
class Directive:
    """A parsed conditional block marker.

    Attributes:
        kind: Marker kind.
        expression: Condition text for ``if`` and ``else if``, else empty.
    """

    kind: DirectiveKind
    expression: str = ""


def parse_directive(body: str) -> Directive | None:
    """Classify the body of a ``{{ ... }}`` action.

    Args:
        body: Text between the braces, trim dashes removed.

    Returns:
        Directive, or None for actions that are not block markers.
    """
    body = body.strip()
    match = _ELSE_IF_RE.fullmatch(body)
    if match:
        return Directive(DirectiveKind.ELSE_IF, (match["expr"] or "").strip())
    match = _IF_RE.fullmatch(body)
    if match:
        return Directive(DirectiveKind.IF, (match["expr"] or "").strip())
    if _ELSE_RE.fullmatch(body):
        return Directive(DirectiveKind.ELSE)
    if _END_RE.fullmatch(body):
        return Directive(DirectiveKind.END)
    return None


@dataclass(slots=True)
class _Frame:
    included: bool
    # Whether a branch of this if/else-if chain has already been taken
    taken: bool


class BlockStack:
    """Inclusion state for nested conditional blocks.

    The stack starts with a single always-included frame and never
    shrinks below it, so a stray ``end`` or ``else`` is a no-op.
    """

    def __init__(self, config: DotfilesConfig, platform: Platform) -> None:
        self.config = config
        self.platform = platform
        self._frames: list[_Frame] = [_Frame(included=True, taken=True)]

    @property
    def included(self) -> bool:
        """Inclusion state of the innermost block."""
        return self._frames[-1].included

    @property
    def depth(self) -> int:
        """Number of open blocks."""
        return len(self._frames) - 1

    def all_included(self) -> bool:
        """Whether every frame on the stack is included."""
        return all(frame.included for frame in self._frames)

    def apply(self, directive: Directive) -> None:
        """Update the stack for a block marker.

        Args:
            directive: Parsed block marker.
        """
        if directive.kind is DirectiveKind.IF:
            result = evaluate(directive.expression, self.config, self.platform)
            self._frames.append(_Frame(included=self.included and result, taken=result))
            return

        if len(self._frames) == 1:
            logger.debug("Ignoring unbalanced %s directive", directive.kind.value)
            return

        if directive.kind is DirectiveKind.END:
            self._frames.pop()
            return

        frame = self._frames[-1]
        parent = self._frames[-2].included
        if directive.kind is DirectiveKind.ELSE:
            frame.included = parent and not frame.taken
            frame.taken = True
        else:
            result = not frame.taken and evaluate(directive.expression, self.config, self.platform)
            frame.included = parent and result
            frame.taken = frame.taken or result


def resolve_patterns(ignore_text: str, config: DotfilesConfig, platform: Platform) -> list[str]:
    """Compute the ignore patterns active for a configuration.

    Blank lines and ``#`` comments are never emitted. Lines starting
    with ``{{`` are block markers; any other line is emitted, trimmed,
    when the innermost block is included.

    Args:
        ignore_text: Raw .chezmoiignore contents.
        config: Configuration providing module states.
        platform: Target platform.

    Returns:
        Active glob patterns in file order.
    """
    stack = BlockStack(config, platform)
    patterns: list[str] = []

    for line in ignore_text.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue

        if trimmed.startswith(DIRECTIVE_PREFIX):
            match = _DIRECTIVE_RE.match(trimmed)
            directive = parse_directive(match["body"]) if match else None
            if directive is None:
                logger.debug("Skipping unsupported template line: %s", trimmed)
            else:
                stack.apply(directive)
            continue

        if trimmed.startswith(COMMENT_PREFIX):
            continue

        if stack.included:
            patterns.append(trimmed)

    return patterns


def should_include_template(content: str, config: DotfilesConfig, platform: Platform) -> bool:
    """Check whether a template leaves no conditional block excluded.

    Every ``{{ if }}``/``{{ else }}``/``{{ end }}`` action in the text is
    applied in order, wherever it appears on a line.

    Args:
        content: Full template text.
        config: Configuration providing module states.
        platform: Target platform.

    Returns:
        True if every frame still open at the end of the text is included.
    """
    stack = BlockStack(config, platform)
    for match in _DIRECTIVE_RE.finditer(content):
        directive = parse_directive(match["body"])
        if directive is not None:
            stack.apply(directive)
    return stack.all_included()
