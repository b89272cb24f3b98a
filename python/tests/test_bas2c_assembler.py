"""Program assembly tests."""

from __future__ import annotations

import io
import logging
import textwrap

import pytest

from bas2c.assembler import (
    PROGRAM_HEADER,
    AssemblerClosedError,
    ProgramAssembler,
    StrayClosePolicy,
    translate_source,
)


def _program(source: str, **kwargs) -> str:
    return translate_source(textwrap.dedent(source).strip("\n"), **kwargs)


def test_empty_input_yields_empty_main():
    assert translate_source("") == PROGRAM_HEADER + "int main() {\n  return 0;\n}\n"


def test_top_level_statements_are_buffered_in_order():
    output = _program(
        """
        X = 5
        PRINT X
        """
    )
    assert output == PROGRAM_HEADER + 'int main() {\n  X = 5;\n  printf("%d\\n", X);\n  return 0;\n}\n'


def test_function_block_is_written_and_closed():
    output = _program(
        """
        FUNCTION F(A)
        LET B = A * 2
        RETURN B
        ENDFUNCTION
        """
    )
    assert output == PROGRAM_HEADER + "int F(int A) {\n  int B = A * 2;\n  return B;\n}\n\n"


def test_function_state_resets_after_close(assembler_buffer):
    assembler, _ = assembler_buffer
    assembler.feed("FUNCTION F(A)")
    assert assembler.state.in_function
    assembler.feed("ENDFUNCTION")
    assert not assembler.state.in_function
    assert assembler.state.function_count == 1


def test_functions_precede_deferred_main():
    output = _program(
        """
        X = 1
        FUNCTION ADD(A, B)
        RETURN A + B
        ENDFUNCTION
        RESULT = ADD(5, 3)
        PRINT RESULT
        """
    )
    expected = (
        PROGRAM_HEADER
        + "int ADD(int A, int B) {\n  return A + B;\n}\n\n"
        + "int main() {\n"
        + "  X = 1;\n"
        + "  RESULT = ADD(5, 3);\n"
        + '  printf("%d\\n", RESULT);\n'
        + "  return 0;\n}\n"
    )
    assert output == expected


def test_if_inside_function_is_one_body_entry():
    output = _program(
        """
        FUNCTION F(X)
        IF X > 0 THEN RETURN X
        RETURN 0
        ENDFUNCTION
        """
    )
    assert output == PROGRAM_HEADER + "int F(int X) {\n  if (X > 0) {\n    return X;\n  }\n  return 0;\n}\n\n"


def test_loops_are_closed_by_next():
    output = _program(
        """
        FOR I = 1 TO 3
        PRINT I
        NEXT I
        """
    )
    assert "  for (int I = 1; I <= 3; I++) {\n  printf(\"%d\\n\", I);\n  }\n" in output


def test_diagnostics_are_routed_like_statements():
    output = _program(
        """
        FOO 1 2
        LET
        """
    )
    assert "  // Command not recognized: FOO\n" in output
    assert "  // Syntax error: LET without variable\n" in output
    assert output.endswith("  return 0;\n}\n")


def test_no_main_when_only_functions_defined():
    output = _program(
        """
        FUNCTION main()
        PRINT "hi"
        RETURN 0
        ENDFUNCTION
        """
    )
    assert output.count("int main(") == 1
    assert output.endswith("}\n\n")


def test_stray_endfunction_ignored_by_default():
    output = _program(
        """
        ENDFUNCTION
        PRINT 1
        """
    )
    assert "ENDFUNCTION" not in output
    assert output == PROGRAM_HEADER + 'int main() {\n  printf("%d\\n", 1);\n  return 0;\n}\n'


def test_stray_endfunction_comment_policy():
    output = _program("ENDFUNCTION", stray_close=StrayClosePolicy.COMMENT)
    assert "  // Syntax error: ENDFUNCTION without FUNCTION\n" in output


def test_function_lines_flush_incrementally(assembler_buffer):
    assembler, buffer = assembler_buffer
    assembler.feed("PRINT 1")
    assembler.feed("FUNCTION G()")
    assembler.feed("RETURN 2")
    assert buffer.getvalue() == PROGRAM_HEADER + "int G() {\n  return 2;\n"
    assert assembler.state.pending_top_level == ['printf("%d\\n", 1);']


def test_finish_only_once():
    assembler = ProgramAssembler(io.StringIO())
    assembler.finish()
    with pytest.raises(AssemblerClosedError):
        assembler.finish()
    with pytest.raises(AssemblerClosedError):
        assembler.feed("PRINT 1")


def test_sessions_are_independent():
    first = ProgramAssembler(io.StringIO())
    second = ProgramAssembler(io.StringIO())
    first.feed("FUNCTION F()")
    second.feed("PRINT 1")
    assert first.state.in_function
    assert not second.state.in_function
    assert second.state.pending_top_level


def test_nested_function_is_written_and_counted(caplog):
    caplog.set_level(logging.WARNING, logger="bas2c.assembler")
    buffer = io.StringIO()
    assembler = ProgramAssembler(buffer)
    assembler.feed("FUNCTION F()")
    assembler.feed("FUNCTION G()")
    assert buffer.getvalue() == PROGRAM_HEADER + "int F() {\nint G() {\n"
    assert assembler.state.function_count == 2
    assert assembler.state.in_function
    assert "function opened inside another function" in caplog.text


def test_input_ending_inside_function_is_not_closed(caplog):
    caplog.set_level(logging.WARNING, logger="bas2c.assembler")
    output = _program(
        """
        FUNCTION F(A)
        RETURN A
        """
    )
    assert output == PROGRAM_HEADER + "int F(int A) {\n  return A;\n"
    assert "input ended inside an open function" in caplog.text


def test_comment_policy_ignores_matched_endfunction():
    output = _program(
        """
        FUNCTION F()
        RETURN 1
        ENDFUNCTION
        """,
        stray_close=StrayClosePolicy.COMMENT,
    )
    assert output == PROGRAM_HEADER + "int F() {\n  return 1;\n}\n\n"
    assert "without FUNCTION" not in output
