"""
Pytest configuration and fixtures for bas2c tests.
"""
import io
import sys
from pathlib import Path

import pytest

PYTHON_SRC = Path(__file__).resolve().parents[1]
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from bas2c.assembler import ProgramAssembler  # noqa: E402


@pytest.fixture
def assembler_buffer():
    """Return a fresh assembler writing into an in-memory buffer."""
    buffer = io.StringIO()
    return ProgramAssembler(buffer), buffer
