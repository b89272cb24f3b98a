"""Console prompt loop feeding a translation session."""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .completion import BasicCompleter
from .session import TranslationSession, read_source_lines

LOGGER = logging.getLogger("bas2c.repl")

PROMPT = "BASIC> "


class BasicREPL:
    """Read BASIC lines until end of input and hand them to the session.

    A TTY gets a prompt_toolkit prompt with history and keyword completion;
    piped input is consumed line by line without prompting.  Passing
    ``prompt_input``/``prompt_output`` forces the prompt on those devices.
    """

    def __init__(
        self,
        session: TranslationSession,
        *,
        history_path: Optional[str] = None,
        stream: Optional[TextIO] = None,
        prompt_input: Any = None,
        prompt_output: Any = None,
    ) -> None:
        self.session = session
        self.history_path = history_path
        self.stream = stream if stream is not None else sys.stdin
        self.prompt_input = prompt_input
        self.prompt_output = prompt_output

    def run(self) -> int:
        if self.prompt_input is not None or self._is_interactive():
            return self._prompt_loop()
        self.session.feed_lines(read_source_lines(self.stream))
        return 0

    def _is_interactive(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(callable(isatty) and isatty())

    def _prompt_loop(self) -> int:
        history = FileHistory(self.history_path) if self.history_path else InMemoryHistory()
        prompt = PromptSession(
            PROMPT,
            history=history,
            completer=BasicCompleter(),
            input=self.prompt_input,
            output=self.prompt_output,
        )
        while True:
            try:
                with patch_stdout():
                    line = prompt.prompt()
            except (EOFError, KeyboardInterrupt):
                print()
                return 0
            fragment = self.session.feed(line)
            LOGGER.debug("line %r -> %s", line, fragment.kind.value)
