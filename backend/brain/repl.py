"""Interactive console for the brain interpreter.

Lines typed at the prompt are run immediately. Colon commands change the
flags used for the next run:

    :paste    collect several lines; two blank lines in a row run them
    :mode     toggle classic / default interpretation mode
    :numin    toggle numeric input mode
    :numout   toggle numeric output mode
    :quit     leave (so do Ctrl-C and end of input)

The console keeps only these flags between runs; every program starts on a
fresh tape.
"""

import logging
import random
from typing import Callable, List, Optional

from . import codec
from .interpreter import CHAR_PROMPT, DEFAULT_TAPE_LENGTH, NUMERIC_PROMPT, Interpreter

logger = logging.getLogger(__name__)

PROMPT = "\n🧠: "
INPUT_PROMPT = "    ❓: "

BANNER = (
    "\nEnter single-line BF code below or\n"
    "  type :paste to paste multiline code\n"
    "  type :mode to toggle classic / default mode\n"
    "  type :numin to toggle numeric input mode\n"
    "  type :numout to toggle numeric output mode\n"
    "  type :quit or enter <CTRL>-C to quit"
)

SIGNOFFS = [
    "Totsiens", "Ma'a as-salaama", "Zdravo", "Farvel", "Tot ziens",
    "Näkemiin", "Au Revoir", "Auf Wiedersehen", "Aloha", "Namaste",
    "Arrivederci", "Sayōnara", "안녕", "Vale", "Ha det bra",
    "Adeus", "Прощай", "Adios", "Adjö", "Görüşürüz",
    "Tạm biệt", "Hwyl fawr", "再见", "Namárië", "Qapla'",
    "Live long and prosper",
]


def prompting_input(
    numeric: bool,
    read_line: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
) -> Callable[[], str]:
    """Input source that asks until the answer fits the current input mode."""
    read_line = read_line or input
    write = write or print

    def read() -> str:
        write("\n    " + (NUMERIC_PROMPT if numeric else CHAR_PROMPT).strip())
        while True:
            given = read_line(INPUT_PROMPT)
            _, err = codec.decode_input(given, numeric)
            if not err:
                return given
            write(err["message"])
            write("  Please try again, or press CTRL-C to quit")

    return read


class Repl:
    """Line-driven console state: mode flags and paste buffer."""

    def __init__(
        self,
        read_line: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None,
        tape_length: int = DEFAULT_TAPE_LENGTH,
        interpreter: Optional[Interpreter] = None,
    ):
        self.read_line = read_line or input
        self.write = write or print
        self.tape_length = tape_length
        self.interpreter = interpreter or Interpreter()
        self.classic = False
        self.numeric_input = False
        self.numeric_output = False
        self.paste_mode = False
        self.paste_lines: List[str] = []
        self.previous_line: Optional[str] = None

    def interpret(self, program: str) -> None:
        res = self.interpreter.run(
            program,
            classic=self.classic,
            numeric_input=self.numeric_input,
            numeric_output=self.numeric_output,
            tape_length=self.tape_length,
            input_source=prompting_input(self.numeric_input, self.read_line, self.write),
        )
        if res["errors"]:
            err = res["errors"]
            self.write(err.get("diagnostic") or err["message"])
        else:
            self.write(res["output"])

    def _toggle(self, line: str) -> None:
        if line == ":mode":
            self.classic = not self.classic
            name = "classic" if self.classic else "default"
            self.write(f"\nChanged interpretation mode to '{name}'")
        elif line == ":numin":
            self.numeric_input = not self.numeric_input
            name = "numeric" if self.numeric_input else "character"
            self.write(f"\nChanged input mode to '{name}'")
        else:
            self.numeric_output = not self.numeric_output
            name = "numeric" if self.numeric_output else "character"
            self.write(f"\nChanged output mode to '{name}'")
        logger.info("flags: classic=%s numeric_input=%s numeric_output=%s",
                    self.classic, self.numeric_input, self.numeric_output)

    def handle_line(self, line: str) -> bool:
        """Process one console line. Returns True when the user quits."""
        if self.paste_mode:
            if line == "" and self.previous_line == "":
                self.write("~~~~~~~~~~~~~ INTERPRETING... ~~~~~~~~~~~~~\n")
                program = "\n".join(self.paste_lines)
                self.paste_mode = False
                self.paste_lines = []
                self.previous_line = None
                self.interpret(program)
            else:
                self.previous_line = line
                self.paste_lines.append(line)
            return False
        if line == ":paste":
            self.write("\nEntering multiline input mode.")
            self.write("Enter two blank lines in a row to interpret.")
            self.write("~~~~~~~~~~~~~~~ BEGIN INPUT ~~~~~~~~~~~~~~~\n\n")
            self.paste_mode = True
            return False
        if line in (":mode", ":numin", ":numout"):
            self._toggle(line)
            return False
        if line == ":quit":
            return True
        if line:
            self.interpret(line)
        return False

    def loop(self) -> None:
        self.write(BANNER)
        while True:
            try:
                line = self.read_line("" if self.paste_mode else PROMPT)
            except (EOFError, KeyboardInterrupt):
                break
            try:
                if self.handle_line(line):
                    break
            except KeyboardInterrupt:
                break
        self.write(f"👋 {random.choice(SIGNOFFS)}\n")


def repl(
    read_line: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
    tape_length: int = DEFAULT_TAPE_LENGTH,
    classic: bool = False,
    numeric_input: bool = False,
    numeric_output: bool = False,
) -> None:
    console = Repl(read_line=read_line, write=write, tape_length=tape_length)
    console.classic = classic
    console.numeric_input = numeric_input
    console.numeric_output = numeric_output
    console.loop()
