from __future__ import annotations

import sys
from typing import BinaryIO, List, Optional, Sequence

import numpy as np

from .errors import BFRuntimeError
from .ir import IncValue, Input, Loop, Move, Node, Output, ensure_recursion_limit, max_depth

TAPE_SIZE = 30000
CELL_MODULUS = 256


class Interpreter:
    """
    Tree-walking interpreter over a circular 30000-cell byte tape.

    Pointer moves wrap modulo TAPE_SIZE and cell arithmetic wraps modulo
    CELL_MODULUS, for deltas of any magnitude. The tape and pointer belong
    to this instance only.
    """

    def __init__(self, stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None):
        self.tape = np.zeros(TAPE_SIZE, dtype=np.uint8)
        self.pointer = 0
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer

    def current_cell(self) -> int:
        return int(self.tape[self.pointer])

    def run(self, program: Sequence[Node]) -> None:
        """
        Execute a program to completion.

        Raises:
            BFRuntimeError: reading from stdin or writing to stdout failed
        """
        ensure_recursion_limit(max_depth(program))
        self._execute(program)
        self._flush()

    def _execute(self, nodes: Sequence[Node]) -> None:
        tape = self.tape
        for n in nodes:
            if isinstance(n, IncValue):
                tape[self.pointer] = (int(tape[self.pointer]) + n.delta) % CELL_MODULUS
            elif isinstance(n, Move):
                self.pointer = (self.pointer + n.delta) % TAPE_SIZE
            elif isinstance(n, Loop):
                while tape[self.pointer]:
                    self._execute(n.body)
            elif isinstance(n, Output):
                self._write(self.current_cell())
            elif isinstance(n, Input):
                tape[self.pointer] = self._read()

    def _write(self, value: int) -> None:
        try:
            self.stdout.write(chr(value).encode('utf-8'))
            self.stdout.flush()
        except OSError as e:
            raise BFRuntimeError(message=f"error while writing data\nMessage error: {e}") from e

    def _flush(self) -> None:
        try:
            self.stdout.flush()
        except OSError as e:
            raise BFRuntimeError(message=f"error while writing data\nMessage error: {e}") from e

    def _read(self) -> int:
        self._flush()
        try:
            data = self.stdin.read(1)
        except OSError as e:
            raise BFRuntimeError(message=f"error while reading data\nMessage error: {e}") from e
        # end of input leaves a zero in the cell
        return data[0] if data else 0

    def dump_tape(self, limit: int = 100, per_row: int = 8) -> List[str]:
        """Rows of cell values covering the pointer and every nonzero cell, up to ``limit`` cells."""
        used = np.flatnonzero(self.tape)
        end = max(self.pointer, int(used[-1]) if used.size else 0) + 1
        cells = [int(b) for b in self.tape[:min(end, limit)]]
        return [
            f"{i:5d}: " + " ".join(f"{v:3d}" for v in cells[i:i + per_row])
            for i in range(0, len(cells), per_row)
        ]
