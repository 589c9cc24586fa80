"""Unit tests validating the interpreter's behaviour under both policies."""

import builtins
import itertools
from pathlib import Path

import pytest

from backend.brain.errors import BrainError
from backend.brain.interpreter import Interpreter, run_program

EXAMPLES = Path(__file__).resolve().parents[2] / "examples"
HELLO = "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."


def load(name):
    return (EXAMPLES / name).read_text(encoding="utf-8")


def feed(*values):
    pending = iter(values)

    def read():
        try:
            return next(pending)
        except StopIteration:
            raise EOFError from None

    return read


@pytest.mark.parametrize("classic", [True, False])
def test_hello_world(classic):
    res = Interpreter().run(HELLO, classic=classic)
    assert res["errors"] is None
    assert res["output"] == "Hello World!\n"
    assert res["steps"] > 0


@pytest.mark.parametrize("classic", [True, False])
def test_example_programs(classic):
    assert run_program(load("wiki_addition.b"), classic) == "7"
    assert run_program(load("wiki_hello_world.b"), classic) == "Hello World!\n"
    assert run_program(load("wiki_hello_world_short.b"), classic) == "Hello World!\n"


@pytest.mark.parametrize("classic", [True, False])
def test_program_that_prints_a_program(classic):
    printed = run_program(load("six_times_seven_source.b"), classic)
    assert printed == load("six_times_seven.b")
    assert run_program(printed, classic) == "6*7=42"


def test_golfed_hello_world_needs_classic_mode():
    program = load("golfed_hello_world.b")
    assert run_program(program, classic=True) == "Hello, World!"
    res = Interpreter().run(program, classic=False)
    assert res["errors"]["code"] == "CELL_UNDERFLOW"


def test_comments_do_not_change_output():
    noisy = "".join(c + " x\n#" for c in HELLO)
    assert run_program(noisy) == run_program(HELLO)


@pytest.mark.parametrize("classic", [True, False])
@pytest.mark.parametrize("program", ["[", "+]", "[[]"])
def test_unmatched_brackets(program, classic):
    res = Interpreter().run(program, classic=classic)
    assert res["errors"]["code"] == "UNMATCHED_BRACKET"


def test_loops_that_are_not_taken_need_no_match():
    # '[' on a non-zero cell and ']' on a zero cell just fall through
    assert run_program("+[-]") == ""
    assert run_program("]") == ""


def test_pointer_below_zero():
    res = Interpreter().run("<", classic=False)
    assert res["errors"]["code"] == "POINTER_OUT_OF_BOUNDS"
    # classic mode lands on the last cell and can wrap back again
    assert run_program("<+>.<.", classic=True, numeric_output=True, tape_length=5) == "01"


def test_pointer_past_single_cell_tape():
    res = Interpreter().run(">>", classic=False, tape_length=1)
    assert res["errors"]["code"] == "POINTER_OUT_OF_BOUNDS"
    assert run_program(">>+.", classic=True, numeric_output=True, tape_length=1) == "1"


def test_decrement_at_zero():
    res = Interpreter().run("-", classic=False)
    assert res["errors"]["code"] == "CELL_UNDERFLOW"
    assert run_program("-.", classic=True, numeric_output=True) == "255"


def test_classic_increment_past_a_byte_wraps_to_zero():
    assert run_program("-+.", classic=True, numeric_output=True) == "0"
    assert run_program(",+.", classic=True, numeric_output=True,
                       input_source=feed(chr(0x10FFFF))) == "0"


def test_numeric_output():
    assert run_program("+" * 7 + ".", numeric_output=True) == "7"
    assert run_program("+" * 42 + ".", numeric_output=True) == "42"
    assert run_program("+" * 55 + ".", numeric_output=True) == "7"
    assert run_program("+" * 300 + ".", numeric_output=True) == "300"


def test_character_io():
    assert run_program(",.", input_source=feed("A")) == "A"
    assert run_program(",+.", input_source=feed("😀")) == "😁"


def test_numeric_input():
    assert run_program(",.", numeric_input=True, numeric_output=True, input_source=feed("42")) == "42"
    assert run_program(",.", numeric_input=True, numeric_output=True, input_source=feed("7")) == "7"
    res = Interpreter().run(",", numeric_input=True, input_source=feed("x"))
    assert res["errors"]["code"] == "NON_DIGIT_NUMERIC_INPUT"


def test_bad_input_length_always_fails():
    for classic, numin, given in itertools.product([True, False], [True, False], ["", "abc"]):
        res = Interpreter().run(",", classic=classic, numeric_input=numin, tape_length=1,
                                input_source=feed(given))
        assert res["errors"]["code"] == "INVALID_INPUT_LENGTH"


def test_missing_input():
    res = Interpreter().run(",,", input_source=feed("a"))
    assert res["errors"]["code"] == "MISSING_INPUT"
    assert res["errors"]["index"] == 1


def test_console_input_is_the_default(monkeypatch):
    prompts = []

    def fake_input(prompt=""):
        prompts.append(prompt)
        return "Z"

    monkeypatch.setattr(builtins, "input", fake_input)
    assert run_program(",.") == "Z"
    assert "single character" in prompts[0]


def test_invalid_codepoint_output():
    res = Interpreter().run(",+.", input_source=feed("\ud7ff"))
    assert res["errors"]["code"] == "INVALID_CODEPOINT"


def test_invalid_tape_length():
    res = Interpreter().run("+", tape_length=0)
    assert res["errors"]["code"] == "INVALID_CONFIGURATION"
    with pytest.raises(BrainError) as exc:
        run_program("+", tape_length=0)
    assert exc.value.code == "INVALID_CONFIGURATION"


def test_error_context_and_diagnostic():
    program = "+" * 65 + ".<<"
    res = Interpreter().run(program)
    assert res["output"] == ""
    err = res["errors"]
    assert err["code"] == "POINTER_OUT_OF_BOUNDS"
    assert err["index"] == 66
    assert err["context"]["output"] == "A"
    assert err["context"]["snippet"][14] == "<"
    assert err["context"]["caret"].index("^") == 14
    diagnostic = err["diagnostic"]
    assert "char index 66" in diagnostic
    assert "message: cannot decrement memory pointer" in diagnostic
    assert "output: A" in diagnostic


def test_snippet_is_padded_and_flattened():
    res = Interpreter().run("\n<\n")
    snippet = res["errors"]["context"]["snippet"]
    assert len(snippet) == 28
    assert snippet[14] == "<"
    assert "\n" not in snippet


def test_run_program_raises_with_diagnostic():
    with pytest.raises(BrainError) as exc:
        run_program("[")
    assert exc.value.code == "UNMATCHED_BRACKET"
    assert "char index 0" in str(exc.value)


def test_runs_are_independent():
    it = Interpreter()
    assert it.run("-", classic=False)["errors"] is not None
    assert it.run("-.", classic=True, numeric_output=True)["output"] == "255"
    assert it.run("+.", numeric_output=True)["output"] == "1"
