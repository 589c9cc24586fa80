"""Translation between cell values and the text seen by ``.`` and ``,``.

Character mode maps a cell to exactly one Unicode scalar value and back.
Numeric mode works on the code points of the digit characters ``0``-``9``:

- output: a cell holding the code point of a digit prints that digit, a
  cell whose tens/ones split is two digit code points prints the two-digit
  number, and anything else prints as plain decimal text;
- input: the user types one or two characters, which are packed into a
  single value (``first << 16 | second`` for two) and split back with a
  16-bit shift and mask, so typing ``42`` stores 42.

Output splits by tens/ones while input splits by 16-bit halves; the two
directions are kept as they are rather than unified.

Functions return ``(value, None)`` or ``(None, error)``.
"""

from typing import Any, Dict, Optional, Tuple

from . import errors

MAX_CODEPOINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)
HALF_MASK = 0xFFFF


def is_scalar_value(value: int) -> bool:
    return 0 <= value <= MAX_CODEPOINT and value not in SURROGATES


def is_digit(code: int) -> bool:
    """True for the code points of ``0`` through ``9``."""
    return 47 < code < 58


def to_digit(code: int) -> int:
    return code - 48


def render_char(value: int) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
    if not is_scalar_value(value):
        return None, errors.make_error(
            errors.INVALID_CODEPOINT,
            f"cell value {value} is not a valid Unicode scalar value",
        )
    return chr(value), None


def render_numeric(value: int) -> str:
    if is_digit(value):
        return str(to_digit(value))
    hi = value // 10
    lo = value - 10 * hi
    if is_digit(hi) and is_digit(lo):
        return str(to_digit(hi) * 10 + to_digit(lo))
    return str(value)


def decode_char(text: str) -> Tuple[Optional[int], Optional[Dict[str, Any]]]:
    """Parse exactly one Unicode scalar value from `text`."""
    if len(text) != 1:
        return None, errors.make_error(
            errors.INVALID_INPUT_LENGTH,
            f"expected a single character but got {len(text)}: {text!r}",
        )
    code = ord(text)
    if not is_scalar_value(code):
        return None, errors.make_error(
            errors.INVALID_CODEPOINT, f"U+{code:04X} is not a valid Unicode scalar value"
        )
    return code, None


def pack_numeric(text: str) -> Tuple[Optional[int], Optional[Dict[str, Any]]]:
    """Pack one or two characters of numeric input into a single value."""
    if len(text) == 1:
        return decode_char(text)
    if len(text) == 2 and all(ord(c) <= HALF_MASK for c in text):
        return (ord(text[0]) << 16) | ord(text[1]), None
    return None, errors.make_error(
        errors.INVALID_INPUT_LENGTH,
        f"expected a 1 or 2-digit number but got {len(text)} characters: {text!r}",
    )


def decode_numeric(text: str) -> Tuple[Optional[int], Optional[Dict[str, Any]]]:
    given, err = pack_numeric(text)
    if err:
        return None, err
    if is_digit(given):
        return to_digit(given), None
    hi = given >> 16
    lo = given & HALF_MASK
    if is_digit(hi) and is_digit(lo):
        return to_digit(hi) * 10 + to_digit(lo), None
    return None, errors.make_error(
        errors.NON_DIGIT_NUMERIC_INPUT, "non-digit characters entered in numeric mode"
    )


def decode_input(text: str, numeric: bool) -> Tuple[Optional[int], Optional[Dict[str, Any]]]:
    return decode_numeric(text) if numeric else decode_char(text)


def encode_output(value: int, numeric: bool) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
    if numeric:
        return render_numeric(value), None
    return render_char(value)
