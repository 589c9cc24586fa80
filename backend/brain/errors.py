"""Error codes and the exception used at the outer edge of the interpreter.

Inside the engine every failure travels as a plain dict
``{"code": ..., "message": ..., "hint"?: ...}`` so handlers can return it
alongside their normal result. `BrainError` only exists for callers that
prefer an exception (``run_program`` and the command line host).
"""

from typing import Any, Dict, Optional

INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
UNMATCHED_BRACKET = "UNMATCHED_BRACKET"
POINTER_OUT_OF_BOUNDS = "POINTER_OUT_OF_BOUNDS"
CELL_OVERFLOW = "CELL_OVERFLOW"
CELL_UNDERFLOW = "CELL_UNDERFLOW"
INVALID_CODEPOINT = "INVALID_CODEPOINT"
INVALID_INPUT_LENGTH = "INVALID_INPUT_LENGTH"
NON_DIGIT_NUMERIC_INPUT = "NON_DIGIT_NUMERIC_INPUT"

# raised by hosts rather than by the tape/codec/matcher primitives
MISSING_INPUT = "MISSING_INPUT"
STEP_LIMIT = "STEP_LIMIT"
TIMEOUT = "TIMEOUT"
OUTPUT_LIMIT = "OUTPUT_LIMIT"

CLASSIC_HINT = "Try enabling classic mode."


def make_error(code: str, message: str, *, hint: Optional[str] = None) -> Dict[str, Any]:
    err: Dict[str, Any] = {"code": code, "message": message}
    if hint:
        err["hint"] = hint
    return err


class BrainError(Exception):
    """Raised by `run_program` when a run fails.

    ``str(exc)`` is the human readable diagnostic (source window, caret,
    message and the output produced so far); ``exc.err`` keeps the
    structured error dict for callers that want the code.
    """

    def __init__(self, err: Dict[str, Any]):
        super().__init__(err.get("diagnostic") or err.get("message", ""))
        self.err = err

    @property
    def code(self) -> str:
        return self.err.get("code", "")
