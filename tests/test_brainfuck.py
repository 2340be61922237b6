import io

import pytest

from lexgraph.brainfuck import BrainfuckError, Op, execute, main, parse

HELLO = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def run(code, data=b""):
    out = io.StringIO()
    execute(code, reader=io.BytesIO(data), writer=out)
    return out.getvalue()


def test_parse_discards_other_characters():
    assert parse("a+b-c") == [Op.INC_DATA, Op.DEC_DATA]


def test_parse_recognises_every_command():
    assert parse("><+-.,[]") == list(Op)


def test_hello_world():
    assert run(HELLO) == "Hello World!\n"


def test_echo_input():
    assert run(",.,.", b"hi") == "hi"


def test_decrement_wraps():
    assert run("-.") == "\xff"


def test_increment_wraps_back_to_zero():
    assert run("-+[.]") == ""


def test_loop_skipped_on_zero():
    assert run("[.]") == ""


def test_empty_program_produces_nothing():
    assert run("just a comment") == ""


def test_unmatched_backward_jump():
    with pytest.raises(BrainfuckError, match="Unexpected conditional backward jump at position 0"):
        run("]")


def test_unmatched_forward_jump():
    with pytest.raises(BrainfuckError, match="Unmatched conditional forward jump"):
        run("[[]")


def test_reading_past_end_of_input():
    with pytest.raises(BrainfuckError, match="reading byte"):
        run(",", b"")


def test_pointer_below_zero():
    with pytest.raises(BrainfuckError):
        run("<")


def test_pointer_beyond_tape():
    with pytest.raises(BrainfuckError):
        run(">" * 30_000 + "+")


def test_main_runs_file(tmp_path, capsys):
    program = tmp_path / "hello.bf"
    program.write_text(HELLO, encoding="utf-8")

    assert main([str(program)]) == 0
    assert capsys.readouterr().out == run(HELLO)


def test_main_reports_bad_program(tmp_path, capsys):
    program = tmp_path / "bad.bf"
    program.write_text("]", encoding="utf-8")

    assert main([str(program)]) == 1
    assert "does not match any '['" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.bf")]) == 1
    assert "Failed to read file" in capsys.readouterr().err