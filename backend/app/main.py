"""FastAPI application entrypoint for the brain interpreter.

A single `/run` endpoint executes a program with the policy flags given in
the request body. Each request constructs a fresh `Interpreter` so no state
is shared between requests, and server-side caps (read from the
environment) keep clients from raising resource limits beyond what the
server allows.
"""

import logging
import os
import time
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from pydantic import BaseModel

from ..brain.interpreter import DEFAULT_TAPE_LENGTH, Interpreter

logger = logging.getLogger(__name__)

# Server-side ceilings; override with environment variables.
MAX_STEPS = int(os.environ.get('BRAIN_MAX_STEPS', '1000000'))
MAX_TIME_S = float(os.environ.get('BRAIN_MAX_TIME_S', '2.0'))
MAX_OUTPUT_CHARS = int(os.environ.get('BRAIN_MAX_OUTPUT_CHARS', '10000'))
MAX_TAPE_LENGTH = int(os.environ.get('BRAIN_MAX_TAPE_LENGTH', '30000'))

app = FastAPI(title="brain API", version="0.1")


def _cap_settings(settings: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Enforce server-side safe caps for runtime tunables.

    Clients may include a `settings` object with per-run limits. The server
    does not trust these: each value is coerced and clamped to the server
    ceiling, and missing values default to the ceiling itself.
    """
    safe = {
        "max_steps": MAX_STEPS,
        "max_time_s": MAX_TIME_S,
        "max_output_chars": MAX_OUTPUT_CHARS,
    }
    if not settings:
        return safe
    caps = {}
    caps["max_steps"] = min(int(settings.get("max_steps", safe["max_steps"])), safe["max_steps"])
    caps["max_time_s"] = min(float(settings.get("max_time_s", safe["max_time_s"])), safe["max_time_s"])
    caps["max_output_chars"] = min(int(settings.get("max_output_chars", safe["max_output_chars"])), safe["max_output_chars"])
    return caps


def _input_feed(inputs: List[str]):
    """Input source handing out `inputs` one per ',' and then EOFError."""
    pending = iter(inputs)

    def read() -> str:
        try:
            return next(pending)
        except StopIteration:
            raise EOFError("input exhausted") from None

    return read


class RunRequest(BaseModel):
    """Pydantic model for the `/run` request body.

    Fields:
        code: program text.
        classic: wrap pointer and cells instead of failing.
        numeric_input / numeric_output: numeric I/O modes.
        tape_length: number of cells; clamped to the server maximum.
        inputs: strings consumed in order by ',' instructions.
        settings: optional runtime limits; capped server-side.
    """
    code: str
    classic: bool = False
    numeric_input: bool = False
    numeric_output: bool = False
    tape_length: int = DEFAULT_TAPE_LENGTH
    inputs: Optional[List[str]] = None
    settings: Optional[Dict[str, Any]] = None


@app.post("/run")
async def run_code(req: RunRequest):
    """Handle a code execution request.

    Any unexpected exception is turned into a SERVER_ERROR payload so callers
    always receive the same JSON shape.
    """
    start = time.time()
    warnings: List[str] = []
    try:
        capped = _cap_settings(req.settings or {})
        it = Interpreter()
        it.max_steps = capped["max_steps"]
        it.max_time_s = capped["max_time_s"]
        it.max_output_chars = capped["max_output_chars"]
        tape_length = req.tape_length
        if tape_length > MAX_TAPE_LENGTH:
            warnings.append(f"Tape length limited to {MAX_TAPE_LENGTH}")
            tape_length = MAX_TAPE_LENGTH
        result = it.run(
            req.code,
            classic=req.classic,
            numeric_input=req.numeric_input,
            numeric_output=req.numeric_output,
            tape_length=tape_length,
            input_source=_input_feed(req.inputs or []),
        )
    except Exception as e:
        logger.exception("run failed unexpectedly")
        return {
            "output": "",
            "warnings": warnings,
            "steps": 0,
            "duration_ms": int((time.time() - start) * 1000),
            "errors": {"code": "SERVER_ERROR", "message": str(e)},
        }
    result["warnings"] = warnings + result["warnings"]
    result["duration_ms"] = int((time.time() - start) * 1000)
    logger.info("run: %d chars, %d steps, error=%s", len(req.code), result["steps"],
                result["errors"]["code"] if result["errors"] else None)
    return result
