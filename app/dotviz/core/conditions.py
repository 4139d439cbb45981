"""Template conditional evaluation.

Evaluates the small subset of Go template predicates used by the
dotfiles repository's ``{{ if ... }}`` blocks:

- ``not EXPR``
- ``and EXPR EXPR ...`` / ``or EXPR EXPR ...``
- ``eq .chezmoi.os "linux"`` (``.platform.os`` is accepted too)
- ``.modules.NAME.enabled``
- ``.modules.NAME.PROPERTY``

Expressions are parsed once into a small AST and then evaluated
against a configuration and target platform. Anything outside this
grammar parses to Unknown, which evaluates to True so that unknown
predicates never hide content.

Known limitation: operands are split with a quote- and
parenthesis-aware whitespace tokenizer, not a full template parser.
Pipelines, variables and functions other than ``eq``/``not``/``and``/
``or`` are not understood.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotviz.models.config import DotfilesConfig, Platform

logger = logging.getLogger(__name__)

_NOT_RE = re.compile(r"not\s+(?P<rest>.+)", re.IGNORECASE | re.DOTALL)
_AND_RE = re.compile(r"and\s+(?P<rest>.+)", re.IGNORECASE | re.DOTALL)
_OR_RE = re.compile(r"or\s+(?P<rest>.+)", re.IGNORECASE | re.DOTALL)
_PLATFORM_EQ_RE = re.compile(
    r"eq\s+\.(?:chezmoi|platform)\.os\s+\"(?P<platform>[^\"]*)\"",
    re.IGNORECASE,
)
_MODULE_RE = re.compile(r"\.modules\.(?P<module>[\w-]+)\.(?P<prop>\w+)")


@dataclass(frozen=True, slots=True)
class Not:
    """Logical negation."""

    operand: Expression


@dataclass(frozen=True, slots=True)
class And:
    """True when every operand is true."""

    operands: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class Or:
    """True when any operand is true."""

    operands: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class PlatformEq:
    """Compares the target platform with a literal."""

    platform: str


@dataclass(frozen=True, slots=True)
class ModuleEnabled:
    """The ``enabled`` flag of a module; missing modules are disabled."""

    module: str


@dataclass(frozen=True, slots=True)
class ModuleProperty:
    """Truthiness of a named module property; missing means False."""

    module: str
    prop: str


@dataclass(frozen=True, slots=True)
class Unknown:
    """Unrecognized expression. Always evaluates to True."""

    text: str


Expression = Not | And | Or | PlatformEq | ModuleEnabled | ModuleProperty | Unknown


def _tokenize(text: str) -> list[str]:
    """Split on whitespace outside double quotes and parentheses."""
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    depth = 0

    for char in text:
        if char == '"':
            in_quotes = not in_quotes
        elif not in_quotes and char == "(":
            depth += 1
        elif not in_quotes and char == ")" and depth > 0:
            depth -= 1
        elif char.isspace() and not in_quotes and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(char)

    if current:
        tokens.append("".join(current))
    return tokens


def _operand_end(tokens: list[str], start: int) -> int:
    """Index just past the operand beginning at ``start``."""
    keyword = tokens[start].lower()
    if keyword == "not" and start + 1 < len(tokens):
        return _operand_end(tokens, start + 1)
    if keyword == "eq":
        return min(start + 3, len(tokens))
    return start + 1


def split_operands(text: str) -> list[str]:
    """Split the operand list of ``and``/``or`` into sub-expressions.

    An ``eq`` operand spans the function name and its two arguments,
    ``not`` binds to the operand that follows it, and a parenthesized
    group is a single operand.

    Args:
        text: Operand list without the leading ``and``/``or``.

    Returns:
        Operand expressions in order.

    Example:
        >>> split_operands('eq .chezmoi.os "linux" .modules.git.enabled')
        ['eq .chezmoi.os "linux"', '.modules.git.enabled']
    """
    tokens = _tokenize(text)
    operands: list[str] = []
    index = 0
    while index < len(tokens):
        end = _operand_end(tokens, index)
        operands.append(" ".join(tokens[index:end]))
        index = end
    return operands


def _strip_parens(text: str) -> str:
    """Remove parentheses that enclose the whole expression."""
    while text.startswith("(") and text.endswith(")"):
        depth = 0
        for index, char in enumerate(text):
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0 and index != len(text) - 1:
                    return text
        text = text[1:-1].strip()
    return text


@lru_cache(maxsize=512)
def parse_expression(text: str) -> Expression:
    """Parse a conditional expression into an AST.

    Args:
        text: Expression as written inside ``{{ if ... }}``.

    Returns:
        Parsed Expression; Unknown for anything outside the grammar.
    """
    expr = _strip_parens(text.strip())

    match = _NOT_RE.fullmatch(expr)
    if match:
        return Not(parse_expression(match["rest"]))

    match = _AND_RE.fullmatch(expr)
    if match:
        return And(tuple(parse_expression(part) for part in split_operands(match["rest"])))

    match = _OR_RE.fullmatch(expr)
    if match:
        return Or(tuple(parse_expression(part) for part in split_operands(match["rest"])))

    match = _PLATFORM_EQ_RE.fullmatch(expr)
    if match:
        return PlatformEq(match["platform"].lower())

    match = _MODULE_RE.fullmatch(expr)
    if match:
        if match["prop"] == "enabled":
            return ModuleEnabled(match["module"])
        return ModuleProperty(match["module"], match["prop"])

    logger.debug("Unknown condition, treating as true: %s", expr)
    return Unknown(expr)


def evaluate_expression(expr: Expression, config: DotfilesConfig, platform: Platform) -> bool:
    """Evaluate a parsed expression.

    Args:
        expr: Parsed expression.
        config: Configuration providing module states.
        platform: Target platform.

    Returns:
        Boolean result of the predicate.
    """
    if isinstance(expr, Not):
        return not evaluate_expression(expr.operand, config, platform)
    if isinstance(expr, And):
        return all(evaluate_expression(op, config, platform) for op in expr.operands)
    if isinstance(expr, Or):
        return any(evaluate_expression(op, config, platform) for op in expr.operands)
    if isinstance(expr, PlatformEq):
        return expr.platform == platform
    if isinstance(expr, ModuleEnabled):
        return config.is_module_enabled(expr.module)
    if isinstance(expr, ModuleProperty):
        module = config.modules.get(expr.module)
        if module is None:
            return False
        return bool(module.get_property(expr.prop))
    # Unknown
    return True


def evaluate(expression: str, config: DotfilesConfig, platform: Platform) -> bool:
    """Parse and evaluate a conditional expression.

    Args:
        expression: Expression text, e.g. ``not .modules.shell.enabled``.
        config: Configuration providing module states.
        platform: Target platform.

    Returns:
        Boolean result; True for unrecognized expressions.
    """
    return evaluate_expression(parse_expression(expression), config, platform)
