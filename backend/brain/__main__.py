"""CLI entry point for the brain interpreter.

Usage:
    python -m backend.brain [-v...] [options]                 start the console
    python -m backend.brain [-v...] [options] <program_file>  run a file once
    python -m backend.brain [-v...] [options] -c <code>       run a string once

Options:
  -v               Increase log verbosity (can be repeated)
  --classic        Wrap pointer and cell values instead of failing
  --numin          Read ',' input as 1 or 2-digit numbers
  --numout         Print '.' output as numbers
  --tape-length N  Number of cells on the tape (default 1000)

A failed run prints its diagnostic to stderr and exits with status 1.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import BrainError
from .interpreter import DEFAULT_TAPE_LENGTH, run_program
from .repl import prompting_input, repl

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="brain tape language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase log verbosity (can be repeated)')
    parser.add_argument('--classic', action='store_true', help='wrap pointer and cells instead of failing')
    parser.add_argument('--numin', action='store_true', help='numeric input mode')
    parser.add_argument('--numout', action='store_true', help='numeric output mode')
    parser.add_argument('--tape-length', type=int, default=DEFAULT_TAPE_LENGTH, metavar='N',
                        help='number of cells on the tape')
    parser.add_argument('-c', dest='code', metavar='CODE', help='program text to run')
    parser.add_argument('program', nargs='?', help='program file to run')
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVELS[min(args.v, len(LOG_LEVELS) - 1)],
                        format='%(levelname)s %(name)s: %(message)s')

    if args.code is not None and args.program:
        parser.error('give either a program file or -c, not both')
    if args.tape_length < 1:
        parser.error('--tape-length must be at least 1')

    if args.code is not None:
        source = args.code
    elif args.program:
        program_file = Path(args.program)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)
        with open(program_file, 'r', encoding='utf-8') as f:
            source = f.read()
    else:
        repl(tape_length=args.tape_length, classic=args.classic,
             numeric_input=args.numin, numeric_output=args.numout)
        return

    try:
        output = run_program(
            source,
            classic=args.classic,
            numeric_input=args.numin,
            numeric_output=args.numout,
            tape_length=args.tape_length,
            input_source=prompting_input(args.numin),
        )
    except BrainError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    sys.stdout.write(output)


if __name__ == '__main__':
    main()
