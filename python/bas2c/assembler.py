"""Assemble translated fragments into one C program.

The assembler owns the only cross-line state.  Function definitions are
written to the sink as soon as their lines arrive; statements seen outside any
function are buffered and wrapped in a synthesized ``main`` when input ends.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, TextIO

from . import fragments
from .fragments import Fragment, FragmentKind
from .translator import translate_line

LOGGER = logging.getLogger("bas2c.assembler")

PROGRAM_HEADER = "#include <stdio.h>\n\n"
INDENT = "  "


class AssemblerClosedError(RuntimeError):
    """Raised when an assembler is used after ``finish()``."""


class StrayClosePolicy(Enum):
    """What to do with ENDFUNCTION when no function is open."""

    IGNORE = "ignore"
    COMMENT = "comment"


@dataclass
class AssemblyState:
    in_function: bool = False
    function_count: int = 0
    pending_top_level: List[str] = field(default_factory=list)
    lines_seen: int = 0


class ProgramAssembler:
    """Route fragments to the function region or the deferred entry point."""

    def __init__(
        self,
        sink: TextIO,
        *,
        stray_close: StrayClosePolicy = StrayClosePolicy.IGNORE,
    ) -> None:
        self.sink = sink
        self.stray_close = stray_close
        self.state = AssemblyState()
        self._finished = False
        self.sink.write(PROGRAM_HEADER)

    @property
    def finished(self) -> bool:
        return self._finished

    def feed(self, line: str) -> Fragment:
        """Translate *line* and place its output."""
        if self._finished:
            raise AssemblerClosedError("assembler already finished")
        fragment = translate_line(line)
        self.state.lines_seen += 1
        self._route(fragment)
        return fragment

    def feed_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.feed(line)

    def _route(self, fragment: Fragment) -> None:
        state = self.state
        if fragment.kind is FragmentKind.FUNCTION_OPEN:
            if state.in_function:
                LOGGER.warning("function opened inside another function: %s", fragment.text)
            LOGGER.debug("function definition: %s", fragment.text)
            self.sink.write(f"{fragment.text}\n")
            state.in_function = True
            state.function_count += 1
        elif fragment.kind is FragmentKind.FUNCTION_CLOSE:
            if state.in_function:
                LOGGER.debug("function end")
                self.sink.write("}\n\n")
                state.in_function = False
            elif self.stray_close is StrayClosePolicy.COMMENT:
                stray = fragments.syntax_error("ENDFUNCTION without FUNCTION")
                state.pending_top_level.append(stray.text)
            else:
                LOGGER.debug("ENDFUNCTION outside a function ignored")
        elif state.in_function:
            LOGGER.debug("statement in function: %s", fragment.text)
            self.sink.write(f"{INDENT}{fragment.text}\n")
        else:
            LOGGER.debug("statement buffered for main: %s", fragment.text)
            state.pending_top_level.append(fragment.text)

    def finish(self) -> None:
        """Emit the entry point (if one is needed); the assembler is then spent."""
        if self._finished:
            raise AssemblerClosedError("assembler already finished")
        self._finished = True
        state = self.state
        if state.in_function:
            LOGGER.warning("input ended inside an open function")
        if state.pending_top_level:
            self.sink.write("int main() {\n")
            for text in state.pending_top_level:
                self.sink.write(f"{INDENT}{text}\n")
            self.sink.write(f"{INDENT}return 0;\n}}\n")
        elif state.function_count == 0:
            self.sink.write("int main() {\n  return 0;\n}\n")


def translate_source(
    source: str,
    *,
    stray_close: StrayClosePolicy = StrayClosePolicy.IGNORE,
) -> str:
    """Translate a complete BASIC program held in memory."""
    buffer = io.StringIO()
    assembler = ProgramAssembler(buffer, stray_close=stray_close)
    assembler.feed_lines(source.splitlines())
    assembler.finish()
    return buffer.getvalue()


__all__ = [
    "AssemblerClosedError",
    "AssemblyState",
    "PROGRAM_HEADER",
    "ProgramAssembler",
    "StrayClosePolicy",
    "translate_source",
]
