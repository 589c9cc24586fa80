# brain: an interpreter for the eight-instruction tape language.
# The package provides the execution engine plus console and batch hosts.
from .errors import BrainError
from .interpreter import Interpreter, run_program
from .tape import Tape

__all__ = [
    'BrainError',
    'Interpreter',
    'Tape',
    'run_program',
]
