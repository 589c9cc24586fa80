"""Tests for the command line host."""

import builtins

import pytest

from backend.brain.__main__ import main

HELLO = "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."


def test_run_code_string(capsys):
    main(["-c", HELLO])
    assert capsys.readouterr().out == "Hello World!\n"


def test_run_file(tmp_path, capsys):
    program = tmp_path / "hello.b"
    program.write_text("prints Hello World\n" + HELLO, encoding="utf-8")
    main([str(program)])
    assert capsys.readouterr().out == "Hello World!\n"


def test_failure_exits_non_zero(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["-c", "<"])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "char index 0" in err
    assert "minimum index 0" in err


def test_policy_flags(capsys):
    main(["--classic", "--numout", "--tape-length", "1", "-c", ">>-."])
    assert capsys.readouterr().out == "255"


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.b")])
    assert exc.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_bad_tape_length():
    with pytest.raises(SystemExit) as exc:
        main(["--tape-length", "0", "-c", "+"])
    assert exc.value.code == 2


def test_no_program_starts_console(monkeypatch, capsys):
    def no_more_input(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", no_more_input)
    main([])
    out = capsys.readouterr().out
    assert "type :paste to paste multiline code" in out
