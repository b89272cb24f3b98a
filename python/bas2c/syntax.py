"""Lexical helpers and argument grammars for BASIC commands.

Scanning is purely lexical: keywords are located with a case-insensitive
substring search and delimiters are matched on their first occurrence.
Nested quotes or parentheses inside arguments are not understood, and a
keyword is found even inside a longer word: `TO` matches in `TOTAL`, and
`THEN` matches in `AUTHENTICATED`, so `IF AUTHENTICATED THEN ...` splits
its condition early.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


class SyntaxErrorKind(Enum):
    LET_WITHOUT_VARIABLE = "LET without variable"
    CHANGE_WITHOUT_ASSIGNMENT = "CHANGE without assignment"
    INPUT_WITHOUT_VARIABLE = "INPUT without variable"
    FUNCTION_WITHOUT_NAME = "FUNCTION without name"
    FOR_WITHOUT_PARAMETERS = "FOR without parameters"
    FOR_WITHOUT_ASSIGNMENT = "FOR without assignment"
    FOR_WITHOUT_TO = "FOR without TO"
    CALL_WITHOUT_FUNCTION = "CALL without function"
    IF_WITHOUT_CONDITION = "IF without condition"
    IF_WITHOUT_THEN = "IF without THEN"
    PRINT_UNTERMINATED_STRING = "PRINT with unterminated string"


class BasicSyntaxError(ValueError):
    """Raised by the argument parsers; carries the diagnostic kind."""

    def __init__(self, kind: SyntaxErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


@dataclass(frozen=True)
class FunctionHeader:
    name: str
    params: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ForHeader:
    variable: str
    start: str
    end: str
    step_text: str = "1"
    step: int = 1

    @property
    def comparator(self) -> str:
        return "<=" if self.step >= 0 else ">="

    @property
    def increment(self) -> str:
        if self.step == 1:
            return f"{self.variable}++"
        if self.step == -1:
            return f"{self.variable}--"
        return f"{self.variable} += {self.step_text}"


@dataclass(frozen=True)
class IfClause:
    condition: str
    body: str


def starts_with_keyword(text: str, keyword: str) -> bool:
    """True when *text* begins with *keyword* as a whole word (any case)."""
    if len(text) < len(keyword):
        return False
    if text[: len(keyword)].upper() != keyword.upper():
        return False
    rest = text[len(keyword):]
    return not rest or rest[0].isspace()


def find_keyword(text: str, keyword: str) -> int:
    return text.upper().find(keyword.upper())


def split_command(line: str) -> Tuple[str, Optional[str]]:
    """Split a trimmed line into its command token and raw argument text."""
    parts = line.strip().split(None, 1)
    if not parts:
        return "", None
    if len(parts) == 1:
        return parts[0], None
    args = parts[1].strip()
    return parts[0], args or None


def parse_int_prefix(text: str) -> int:
    """Parse a leading signed integer the way C ``atoi`` does (0 on failure)."""
    match = _LEADING_INT_RE.match(text)
    return int(match.group(1)) if match else 0


def parse_function_header(args: Optional[str]) -> FunctionHeader:
    if not args:
        raise BasicSyntaxError(SyntaxErrorKind.FUNCTION_WITHOUT_NAME)
    open_idx = args.find("(")
    if open_idx < 0:
        return FunctionHeader(args.strip())
    name = args[:open_idx].strip()
    if not name:
        raise BasicSyntaxError(SyntaxErrorKind.FUNCTION_WITHOUT_NAME)
    inner = args[open_idx + 1:]
    close_idx = inner.find(")")
    if close_idx >= 0:
        inner = inner[:close_idx]
    params: List[str] = [part.strip() for part in inner.split(",")]
    return FunctionHeader(name, tuple(param for param in params if param))


def parse_for_header(args: Optional[str]) -> ForHeader:
    if not args:
        raise BasicSyntaxError(SyntaxErrorKind.FOR_WITHOUT_PARAMETERS)
    variable, sep, rest = args.partition("=")
    if not sep:
        raise BasicSyntaxError(SyntaxErrorKind.FOR_WITHOUT_ASSIGNMENT)
    rest = rest.strip()
    to_idx = find_keyword(rest, "TO")
    if to_idx < 0:
        raise BasicSyntaxError(SyntaxErrorKind.FOR_WITHOUT_TO)
    start = rest[:to_idx].strip()
    end = rest[to_idx + 2:].strip()
    step_text = "1"
    step_idx = find_keyword(end, "STEP")
    if step_idx >= 0:
        step_text = end[step_idx + 4:].strip() or "1"
        end = end[:step_idx].strip()
    return ForHeader(variable.strip(), start, end, step_text, parse_int_prefix(step_text))


def parse_if_clause(args: Optional[str]) -> IfClause:
    if not args:
        raise BasicSyntaxError(SyntaxErrorKind.IF_WITHOUT_CONDITION)
    then_idx = find_keyword(args, "THEN")
    if then_idx < 0:
        raise BasicSyntaxError(SyntaxErrorKind.IF_WITHOUT_THEN)
    return IfClause(args[:then_idx].strip(), args[then_idx + 4:].strip())


__all__ = [
    "BasicSyntaxError",
    "ForHeader",
    "FunctionHeader",
    "IfClause",
    "SyntaxErrorKind",
    "find_keyword",
    "parse_for_header",
    "parse_function_header",
    "parse_if_clause",
    "parse_int_prefix",
    "split_command",
    "starts_with_keyword",
]
