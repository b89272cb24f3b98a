"""Per-line BASIC to C translation.

``translate_line`` is a pure function of its input text: every call returns a
fresh :class:`~bas2c.fragments.Fragment` and keeps no state between calls.
Command-level problems never raise; they come back as comment fragments so a
malformed line degrades to inert C instead of aborting the translation.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from . import fragments
from .fragments import Fragment
from .syntax import (
    BasicSyntaxError,
    SyntaxErrorKind,
    parse_for_header,
    parse_function_header,
    parse_if_clause,
    split_command,
    starts_with_keyword,
)

LOGGER = logging.getLogger("bas2c.translator")

Handler = Callable[[Optional[str]], Fragment]

COMMANDS: Dict[str, Handler] = {}

# Lines led by these keywords may contain '=' without being bare assignments.
_ASSIGNMENT_EXEMPT = ("LET", "FUNCTION", "FOR")


def _command(name: str) -> Callable[[Handler], Handler]:
    def register(handler: Handler) -> Handler:
        COMMANDS[name] = handler
        return handler

    return register


def _require(args: Optional[str], kind: SyntaxErrorKind) -> str:
    if not args:
        raise BasicSyntaxError(kind)
    return args


@_command("PRINT")
def _print(args: Optional[str]) -> Fragment:
    if not args:
        return fragments.statement('printf("\\n");')
    if args == '"':
        raise BasicSyntaxError(SyntaxErrorKind.PRINT_UNTERMINATED_STRING)
    if args.startswith('"') and args.endswith('"'):
        return fragments.statement(f'printf("%s\\n", {args});')
    return fragments.statement(f'printf("%d\\n", {args});')


@_command("LET")
def _let(args: Optional[str]) -> Fragment:
    return fragments.statement(f"int {_require(args, SyntaxErrorKind.LET_WITHOUT_VARIABLE)};")


@_command("CHANGE")
def _change(args: Optional[str]) -> Fragment:
    return fragments.statement(f"{_require(args, SyntaxErrorKind.CHANGE_WITHOUT_ASSIGNMENT)};")


@_command("INPUT")
def _input(args: Optional[str]) -> Fragment:
    target = _require(args, SyntaxErrorKind.INPUT_WITHOUT_VARIABLE)
    return fragments.statement(f'scanf("%d", &{target});')


@_command("FUNCTION")
def _function(args: Optional[str]) -> Fragment:
    header = parse_function_header(args)
    params = ", ".join(f"int {param}" for param in header.params)
    return fragments.function_open(f"int {header.name}({params}) {{")


@_command("ENDFUNCTION")
def _endfunction(args: Optional[str]) -> Fragment:
    return fragments.function_close()


@_command("RETURN")
def _return(args: Optional[str]) -> Fragment:
    if args:
        return fragments.statement(f"return {args};")
    return fragments.statement("return;")


@_command("FOR")
def _for(args: Optional[str]) -> Fragment:
    loop = parse_for_header(args)
    return fragments.statement(
        f"for (int {loop.variable} = {loop.start}; "
        f"{loop.variable} {loop.comparator} {loop.end}; {loop.increment}) {{"
    )


@_command("NEXT")
def _next(args: Optional[str]) -> Fragment:
    # Loop closers are not paired with their FOR; the variable is ignored.
    return fragments.statement("}")


@_command("CALL")
def _call(args: Optional[str]) -> Fragment:
    return fragments.statement(f"{_require(args, SyntaxErrorKind.CALL_WITHOUT_FUNCTION)};")


@_command("IF")
def _if(args: Optional[str]) -> Fragment:
    clause = parse_if_clause(args)
    if not clause.body:
        return fragments.comment("Error interpreting THEN clause")
    inner = translate_line(clause.body)
    if inner.is_structural:
        return fragments.comment("Error interpreting THEN clause")
    return fragments.statement(f"if ({clause.condition}) {{\n    {inner.body_text()};\n  }}")


def is_bare_assignment(line: str) -> bool:
    if "=" not in line:
        return False
    return not any(starts_with_keyword(line, keyword) for keyword in _ASSIGNMENT_EXEMPT)


def translate_line(line: str) -> Fragment:
    """Translate one BASIC source line into a single fragment."""
    text = line.strip()
    if not text:
        return fragments.comment("Empty command")
    if is_bare_assignment(text):
        result = fragments.statement(f"{text};")
    else:
        cmd, args = split_command(text)
        handler = COMMANDS.get(cmd.upper())
        if handler is None:
            result = fragments.comment(f"Command not recognized: {cmd}")
        else:
            try:
                result = handler(args)
            except BasicSyntaxError as exc:
                result = fragments.syntax_error(exc.kind.value)
    LOGGER.debug("translated %r -> %s %r", text, result.kind.value, result.text)
    return result


__all__ = ["COMMANDS", "is_bare_assignment", "translate_line"]
