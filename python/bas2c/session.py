"""Translation session: ties an assembler to its destination file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, TextIO

from .assembler import ProgramAssembler, StrayClosePolicy
from .fragments import Fragment

LOGGER = logging.getLogger("bas2c.session")

DEFAULT_OUTPUT = "output.c"


def read_source_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from *stream* with the trailing newline removed."""
    for raw in stream:
        yield raw.rstrip("\r\n")


@dataclass
class TranslationSession:
    """Owns the output file for one run; ``close()`` writes the entry point."""

    output_path: Path = Path(DEFAULT_OUTPUT)
    stray_close: StrayClosePolicy = StrayClosePolicy.IGNORE
    _handle: Optional[TextIO] = field(default=None, init=False, repr=False)
    _assembler: Optional[ProgramAssembler] = field(default=None, init=False, repr=False)

    def open(self) -> ProgramAssembler:
        if self._assembler is not None:
            return self._assembler
        path = Path(self.output_path).expanduser()
        self._handle = path.open("w", encoding="utf-8")
        self._assembler = ProgramAssembler(self._handle, stray_close=self.stray_close)
        LOGGER.debug("writing translation to %s", path)
        return self._assembler

    def feed(self, line: str) -> Fragment:
        return self.open().feed(line)

    def feed_lines(self, lines: Iterable[str]) -> None:
        assembler = self.open()
        for line in lines:
            assembler.feed(line)

    def close(self) -> None:
        assembler = self.open()
        handle = self._handle
        try:
            if not assembler.finished:
                assembler.finish()
        finally:
            if handle is not None and not handle.closed:
                handle.close()

    def summary(self) -> Dict[str, object]:
        state = self._assembler.state if self._assembler else None
        return {
            "output": str(self.output_path),
            "lines": state.lines_seen if state else 0,
            "functions": state.function_count if state else 0,
            "statements": len(state.pending_top_level) if state else 0,
        }

    def __enter__(self) -> "TranslationSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["DEFAULT_OUTPUT", "TranslationSession", "read_source_lines"]
