"""Translated output units produced for each BASIC source line."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FragmentKind(Enum):
    FUNCTION_OPEN = "function_open"
    FUNCTION_CLOSE = "function_close"
    STATEMENT = "statement"
    COMMENT = "comment"


@dataclass(frozen=True)
class Fragment:
    """One translated line tagged with its structural role.

    ``COMMENT`` fragments carry diagnostics.  They are valid C and are routed
    by the assembler exactly like ordinary statements.
    """

    kind: FragmentKind
    text: str = ""

    @property
    def is_structural(self) -> bool:
        return self.kind in (FragmentKind.FUNCTION_OPEN, FragmentKind.FUNCTION_CLOSE)

    def body_text(self) -> str:
        """Return the text with a single trailing statement terminator removed."""
        text = self.text.strip()
        if text.endswith(";"):
            return text[:-1]
        return text


def function_open(text: str) -> Fragment:
    return Fragment(FragmentKind.FUNCTION_OPEN, text)


def function_close() -> Fragment:
    return Fragment(FragmentKind.FUNCTION_CLOSE)


def statement(text: str) -> Fragment:
    return Fragment(FragmentKind.STATEMENT, text)


def comment(message: str) -> Fragment:
    return Fragment(FragmentKind.COMMENT, f"// {message}")


def syntax_error(message: str) -> Fragment:
    return comment(f"Syntax error: {message}")


__all__ = [
    "Fragment",
    "FragmentKind",
    "comment",
    "function_close",
    "function_open",
    "statement",
    "syntax_error",
]
