"""Tape model: a fixed number of unsigned 32-bit cells and a memory pointer.

Two overflow policies share the same tape:

- strict: the pointer must stay inside ``[0, length - 1]`` and cells use the
  full ``[0, 2**32 - 1]`` range; stepping past either edge is an error.
- classic: the pointer wraps around the tape and ``+``/``-`` wrap inside the
  byte window ``[0, 255]``. Cells can still hold larger values (for example
  from ``,``); ``+`` on any value of 255 or more resets to 0.

Mutating methods return ``None`` on success or an error dict, never raise.
"""

from typing import Any, Dict, List, Optional

from . import errors

CELL_MIN = 0
CELL_MAX = 2 ** 32 - 1
CLASSIC_CELL_MAX = 255


class Tape:
    """Cells plus the memory pointer for a single run."""

    def __init__(self, length: int = 1000):
        if length < 1:
            raise ValueError("must provide at least 1 cell of memory")
        self.length = length
        self.cells: List[int] = [0] * length
        self.pointer = 0

    @classmethod
    def create(cls, length: int):
        """Build a tape, returning ``(tape, None)`` or ``(None, error)``."""
        try:
            return cls(int(length)), None
        except (TypeError, ValueError):
            return None, errors.make_error(
                errors.INVALID_CONFIGURATION,
                f"must provide at least 1 cell of memory (got {length!r})",
            )

    @property
    def value(self) -> int:
        return self.cells[self.pointer]

    @value.setter
    def value(self, new: int) -> None:
        self.cells[self.pointer] = new

    def move(self, op: str, classic: bool) -> Optional[Dict[str, Any]]:
        """Apply ``<`` or ``>`` to the memory pointer."""
        last = self.length - 1
        if op == "<":
            if self.pointer > 0:
                self.pointer -= 1
            elif classic:
                self.pointer = last
            else:
                return errors.make_error(
                    errors.POINTER_OUT_OF_BOUNDS,
                    "cannot decrement memory pointer below minimum index 0",
                    hint=errors.CLASSIC_HINT,
                )
            return None
        if op == ">":
            if self.pointer < last:
                self.pointer += 1
            elif classic:
                self.pointer = 0
            else:
                return errors.make_error(
                    errors.POINTER_OUT_OF_BOUNDS,
                    f"cannot increment memory pointer above maximum index {last}",
                    hint=errors.CLASSIC_HINT,
                )
            return None
        raise ValueError(f"move received invalid op: {op}")

    def change(self, op: str, classic: bool) -> Optional[Dict[str, Any]]:
        """Apply ``+`` or ``-`` to the current cell."""
        index = self.pointer
        current = self.cells[index]
        if op == "+":
            if classic:
                self.cells[index] = 0 if current >= CLASSIC_CELL_MAX else current + 1
            elif current >= CELL_MAX:
                return errors.make_error(
                    errors.CELL_OVERFLOW,
                    f"cell {index} is already at maximum allowable value, 2^32 - 1",
                    hint=errors.CLASSIC_HINT,
                )
            else:
                self.cells[index] = current + 1
            return None
        if op == "-":
            if classic:
                self.cells[index] = CLASSIC_CELL_MAX if current < 1 else current - 1
            elif current <= CELL_MIN:
                return errors.make_error(
                    errors.CELL_UNDERFLOW,
                    f"cell {index} is already at minimum allowable value, 0",
                    hint=errors.CLASSIC_HINT,
                )
            else:
                self.cells[index] = current - 1
            return None
        raise ValueError(f"change received invalid op: {op}")

    def __repr__(self) -> str:
        return f"Tape(length={self.length}, pointer={self.pointer}, value={self.value})"
