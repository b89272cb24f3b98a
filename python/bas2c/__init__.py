"""
bas2c: translate a line-oriented BASIC dialect into a C program.

Use ``python -m bas2c`` or ``python/bas2c.py`` to launch the translator.
"""

from __future__ import annotations

from .assembler import ProgramAssembler, StrayClosePolicy, translate_source
from .cli import main
from .translator import translate_line

__all__ = [
    "ProgramAssembler",
    "StrayClosePolicy",
    "main",
    "translate_line",
    "translate_source",
]
__version__ = "0.1.0"
