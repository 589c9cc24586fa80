"""Execution engine for the brain tape language.

A program is plain text; only the eight characters ``> < + - . , [ ]`` do
anything and everything else is a comment. The instruction pointer is an
index into that text, so no parsing step is needed.

Each run gets its own `RunState` (tape, instruction pointer, output) and
the same `Interpreter` can be reused for any number of independent runs
with different policies. Handlers never raise for program errors: they
return a structured error dict, which the dispatch loop wraps exactly once
with a source window and the output produced so far before the run stops.

Policy flags passed to `Interpreter.run`:

- ``classic``: wrap the pointer around the tape and cells inside
  ``[0, 255]`` instead of failing (see `backend.brain.tape`).
- ``numeric_input`` / ``numeric_output``: read and print one or two digit
  numbers instead of single characters (see `backend.brain.codec`).
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from . import brackets, codec, errors
from .tape import Tape

logger = logging.getLogger(__name__)

TOKENS = frozenset("><+-.,[]")
DEFAULT_TAPE_LENGTH = 1000

# characters shown either side of the instruction pointer in diagnostics
WINDOW_PAD = 14
CARET_LINE = "Error at      ^      char index {index}"
_FLATTEN = str.maketrans("\n\r\t", "   ")

CHAR_PROMPT = "Please provide a single character for ',' input: "
NUMERIC_PROMPT = "Please provide a 1 or 2-digit number for ',' input: "

InputSource = Callable[[], str]


def console_input(numeric: bool = False) -> InputSource:
    """Return an input source that asks on the console for every ``,``."""
    prompt = NUMERIC_PROMPT if numeric else CHAR_PROMPT

    def read() -> str:
        return input(prompt)

    return read


def render_snippet(program: str, index: int) -> str:
    """Fixed-width window of `program` with `index` in column `WINDOW_PAD`."""
    lo = max(0, index - WINDOW_PAD)
    hi = min(index + WINDOW_PAD, len(program))
    left = " " * (WINDOW_PAD - (index - lo))
    right = " " * (WINDOW_PAD - (hi - index))
    return left + program[lo:hi].translate(_FLATTEN) + right


@dataclass
class RunState:
    """Everything one run mutates. Never shared between runs."""

    program: str
    tape: Tape
    input_source: InputSource
    classic: bool = False
    numeric_input: bool = False
    numeric_output: bool = False
    ip: int = 0
    steps: int = 0
    output: List[str] = field(default_factory=list)
    output_chars: int = 0

    @property
    def output_text(self) -> str:
        return "".join(self.output)


class Interpreter:
    """Top-level interpreter.

    Tunable attributes (all disabled with ``None`` by default; hosts that run
    untrusted programs should set them):

    - max_steps: maximum number of tokens executed per run
    - max_time_s: wall-clock budget per run, in seconds
    - max_output_chars: maximum length of the output text
    """

    def __init__(self):
        self.max_steps: Optional[int] = None
        self.max_time_s: Optional[float] = None
        self.max_output_chars: Optional[int] = None

    # --- Error helpers -------------------------------------------------
    def _with_context(self, err: Dict[str, Any], state: RunState) -> Dict[str, Any]:
        """Attach the instruction pointer, source window and output so far.

        Applied once per run, at the point the error leaves a handler.
        """
        if "diagnostic" in err:
            return err
        index = state.ip
        snippet = render_snippet(state.program, index)
        caret = CARET_LINE.format(index=index)
        output = state.output_text
        lines = ["", snippet, caret, f"  message: {err['message']}"]
        if err.get("hint"):
            lines.append(f"     hint: {err['hint']}")
        lines.append(f"   output: {output}")
        err["index"] = index
        err["context"] = {"snippet": snippet, "caret": caret, "output": output}
        err["diagnostic"] = "\n".join(lines) + "\n"
        return err

    # --- Token handlers ------------------------------------------------
    def _handle_jump(self, state: RunState) -> Optional[Dict[str, Any]]:
        target, err = brackets.find_match(state.program, state.ip)
        if err:
            return err
        state.ip = target
        return None

    def _handle_output(self, state: RunState) -> Optional[Dict[str, Any]]:
        text, err = codec.encode_output(state.tape.value, state.numeric_output)
        if err:
            return err
        if self.max_output_chars is not None and state.output_chars + len(text) > self.max_output_chars:
            return errors.make_error(errors.OUTPUT_LIMIT, "Output length limit reached")
        state.output.append(text)
        state.output_chars += len(text)
        return None

    def _handle_input(self, state: RunState) -> Optional[Dict[str, Any]]:
        try:
            given = state.input_source()
        except EOFError:
            return errors.make_error(errors.MISSING_INPUT, "no input left for ','")
        value, err = codec.decode_input(given, state.numeric_input)
        if err:
            return err
        state.tape.value = value
        return None

    def _dispatch_token(self, state: RunState, op: str) -> Optional[Dict[str, Any]]:
        """Execute one token. Returns an error dict or None."""
        if op == "[":
            return self._handle_jump(state) if state.tape.value == 0 else None
        if op == "]":
            return self._handle_jump(state) if state.tape.value != 0 else None
        if op in "<>":
            return state.tape.move(op, state.classic)
        if op in "+-":
            return state.tape.change(op, state.classic)
        if op == ".":
            return self._handle_output(state)
        return self._handle_input(state)

    def _check_limits(self, state: RunState, start_wall: float) -> Optional[Dict[str, Any]]:
        if self.max_steps is not None and state.steps >= self.max_steps:
            return errors.make_error(errors.STEP_LIMIT, "Step limit exceeded")
        if self.max_time_s is not None and time.time() - start_wall > self.max_time_s:
            return errors.make_error(errors.TIMEOUT, "Time limit exceeded")
        return None

    # --- Run loop ------------------------------------------------------
    def _execute_core(self, state: RunState) -> Optional[Dict[str, Any]]:
        """Run `state` to completion. Returns the wrapped error, if any."""
        program = state.program
        end = len(program)
        start_wall = time.time()
        while state.ip < end:
            op = program[state.ip]
            if op in TOKENS:
                err = self._check_limits(state, start_wall) or self._dispatch_token(state, op)
                if err:
                    return self._with_context(err, state)
                state.steps += 1
            state.ip += 1
        return None

    def run(
        self,
        code: str,
        *,
        classic: bool = False,
        numeric_input: bool = False,
        numeric_output: bool = False,
        tape_length: int = DEFAULT_TAPE_LENGTH,
        input_source: Optional[InputSource] = None,
    ) -> Dict[str, Any]:
        """Run `code` once and return a result dict.

        The result has the keys ``output`` (text), ``warnings``, ``steps``
        (tokens executed) and ``errors``. ``errors`` is None on success;
        otherwise it is the error dict with ``code``, ``message``, ``index``,
        ``context`` and the rendered ``diagnostic``, and ``output`` is empty
        (the partial output is in ``errors["context"]["output"]``).
        """
        tape, err = Tape.create(tape_length)
        if err:
            return self._finalize_run(None, err)
        state = RunState(
            program=code,
            tape=tape,
            input_source=input_source or console_input(numeric_input),
            classic=classic,
            numeric_input=numeric_input,
            numeric_output=numeric_output,
        )
        logger.debug(
            "run start: %d chars, classic=%s numeric_input=%s numeric_output=%s tape_length=%d",
            len(code), classic, numeric_input, numeric_output, tape.length,
        )
        return self._finalize_run(state, self._execute_core(state))

    def _finalize_run(self, state: Optional[RunState], err: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        steps = state.steps if state else 0
        if err:
            logger.debug("run failed after %d steps: %s: %s", steps, err["code"], err["message"])
            return {"output": "", "warnings": [], "steps": steps, "errors": err}
        logger.debug("run finished after %d steps", steps)
        return {"output": state.output_text, "warnings": [], "steps": steps, "errors": None}


def run_program(
    code: str,
    classic: bool = False,
    numeric_input: bool = False,
    numeric_output: bool = False,
    tape_length: int = DEFAULT_TAPE_LENGTH,
    input_source: Optional[InputSource] = None,
    interpreter: Optional[Interpreter] = None,
) -> str:
    """Run `code` and return its output, raising `BrainError` on failure."""
    it = interpreter or Interpreter()
    res = it.run(
        code,
        classic=classic,
        numeric_input=numeric_input,
        numeric_output=numeric_output,
        tape_length=tape_length,
        input_source=input_source,
    )
    if res["errors"]:
        raise errors.BrainError(res["errors"])
    return res["output"]
