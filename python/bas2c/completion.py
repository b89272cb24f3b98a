"""prompt_toolkit completer for the BASIC prompt."""

from __future__ import annotations

from typing import Iterable, Sequence

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from .translator import COMMANDS


class BasicCompleter(Completer):
    """Complete the command keyword at the start of a line."""

    def __init__(self, keywords: Sequence[str] | None = None) -> None:
        self.keywords = sorted(keywords if keywords is not None else COMMANDS)

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor.lstrip()
        if any(ch.isspace() for ch in text):
            return
        prefix = text.upper()
        for keyword in self.keywords:
            if keyword.startswith(prefix):
                yield Completion(keyword, start_position=-len(text))
