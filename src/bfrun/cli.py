from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from .api import RunOptions, compile_file, run_program
from .errors import BFConfigError, BFError, BFRuntimeError
from .ir import emit


def _debug(message: str) -> None:
    print(f"[DEBUG] {message}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfrun",
        description="Compile, optimize and run a Brainfuck program.",
    )
    parser.add_argument("path", nargs="?", help="Brainfuck source file")
    parser.add_argument("--debug", action="store_true", help="Print compile/run statistics and the tape to stderr")
    parser.add_argument("--no-optimize", action="store_true", help="Skip instruction folding")
    args = parser.parse_args(argv)

    options = RunOptions(optimize=not args.no_optimize, debug=args.debug)

    try:
        if args.path is None:
            raise BFConfigError(message="no path to the brainfuck file provided")

        start = time.perf_counter()
        result = compile_file(args.path, options=options)
        end = time.perf_counter()

        if options.debug:
            for line in result.trace:
                _debug(line)
            _debug(f"Compilation took {(end - start) * 1000:.2f} ms")
            text = emit(result.program)
            if len(text) < 1024:
                _debug(f"program: {text}")

        start = time.perf_counter()
        interpreter = run_program(result.program)
        end = time.perf_counter()

        if options.debug:
            _debug(f"Execution took {(end - start) * 1000:.2f} ms")
            _debug(f"pointer: {interpreter.pointer}")
            for row in interpreter.dump_tape():
                _debug(row)
    except BFError as e:
        if isinstance(e, BFConfigError):
            print(f"[{e.tag}] {e}", file=sys.stderr)
            print(f"[INFO] Usage: {parser.prog} <brainfuck file path>", file=sys.stderr)
        else:
            # keep clear of partial program output
            lead = "\n\n" if isinstance(e, BFRuntimeError) else ""
            print(f"{lead}[{e.tag}] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
