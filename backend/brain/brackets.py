"""Bracket matching for loop jumps.

No jump table is built: each jump rescans the program text from the bracket
outward, counting nesting depth until it returns to zero.
"""

from typing import Any, Dict, Optional, Tuple

from . import errors


def find_match(program: str, position: int) -> Tuple[Optional[int], Optional[Dict[str, Any]]]:
    """Return the index of the bracket matching the one at `position`.

    Scans forward from a ``[`` and backward from a ``]``. The engine resumes
    one character past the returned index, i.e. just after the closing
    bracket when skipping a loop and just after the opening bracket when
    repeating it.

    Returns ``(index, None)`` or ``(None, error)`` for an unmatched bracket.
    """
    op = program[position]
    if op == "[":
        depth = 1
        for j in range(position + 1, len(program)):
            c = program[j]
            if c == "]":
                depth -= 1
            elif c == "[":
                depth += 1
            if depth == 0:
                return j, None
        return None, errors.make_error(
            errors.UNMATCHED_BRACKET, "missing close-brace ] for this open-brace ["
        )
    if op == "]":
        depth = 1
        for j in range(position - 1, -1, -1):
            c = program[j]
            if c == "[":
                depth -= 1
            elif c == "]":
                depth += 1
            if depth == 0:
                return j, None
        return None, errors.make_error(
            errors.UNMATCHED_BRACKET, "missing open-brace [ for this close-brace ]"
        )
    raise ValueError(f"find_match received invalid op: {op}")
