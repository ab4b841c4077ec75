from __future__ import annotations

from typing import Iterator, List, Tuple, Union

from .errors import make_compile_error
from .ir import IncValue, Input, Loop, Move, Node, Output, count_nodes, ensure_recursion_limit
from .state import CompilerState

_OPEN = ord('[')
_CLOSE = ord(']')

_SIMPLE = {
    ord('>'): Move(1),
    ord('<'): Move(-1),
    ord('+'): IncValue(1),
    ord('-'): IncValue(-1),
    ord('.'): Output(),
    ord(','): Input(),
}


class Compiler:
    """
    Brainfuck compiler.

    Turns source bytes into a nested instruction tree in a single
    left-to-right scan. Every byte outside ``><+-.,[]`` is a comment.

    Bracket balance is validated during the scan:
    - a ']' at the outermost level fails immediately at its own position
    - end of input inside a loop fails at the position of the innermost
      '[' still open, recovered from the bracket position stack
    """

    def __init__(self, trace: bool = False):
        self.state = CompilerState(is_tracing=trace)
        self._source = b''
        self._bytes: Iterator[int] = iter(())

    @property
    def trace(self) -> List[str]:
        return self.state.trace

    def compile(self, source: Union[bytes, bytearray, str]) -> List[Node]:
        """
        Compile source text into an instruction tree.

        Args:
            source: program text; ``str`` is encoded as UTF-8 first

        Returns:
            Top-level instruction list

        Raises:
            BFCompileError: unbalanced brackets
        """
        if isinstance(source, str):
            source = source.encode('utf-8')
        self.state.reset()
        self._source = bytes(source)
        self._bytes = iter(self._source)

        ensure_recursion_limit(_nesting_depth(self._source))
        program = self._compile_block(level=0)
        self.state.add_trace(
            f"compiled {len(self._source)} bytes into {count_nodes(program)} instructions "
            f"({self.state.line} lines)"
        )
        return program

    def _compile_block(self, level: int) -> List[Node]:
        state = self.state
        body: List[Node] = []

        # Nested calls share self._bytes, so each call resumes where the inner one stopped.
        for byte in self._bytes:
            simple = _SIMPLE.get(byte)
            if simple is not None:
                body.append(simple)
            elif byte == _OPEN:
                state.brackets.append(('[', state.line, state.position))
                state.advance(byte)
                body.append(Loop(self._compile_block(level + 1)))
                continue
            elif byte == _CLOSE:
                if level == 0:
                    raise make_compile_error(
                        message="closed a nonexistent loop",
                        source=self._source,
                        line=state.line,
                        position=state.position,
                    )
                state.brackets.append((']', state.line, state.position))
                state.advance(byte)
                return body
            state.advance(byte)

        if level > 0:
            line, position = self._find_unclosed()
            raise make_compile_error(
                message="opened a nonexistent loop",
                source=self._source,
                line=line,
                position=position,
            )
        return body

    def _find_unclosed(self) -> Tuple[int, int]:
        # Walk the stack from the top; every ']' hides exactly one earlier '['.
        depth = 0
        while self.state.brackets:
            symbol, line, position = self.state.brackets.pop()
            if symbol == ']':
                depth += 1
            elif depth == 0:
                return line, position
            else:
                depth -= 1
        raise ValueError("no unclosed '[' on the bracket stack")


def _nesting_depth(data: bytes) -> int:
    depth = deepest = 0
    for byte in data:
        if byte == _OPEN:
            depth += 1
            deepest = max(deepest, depth)
        elif byte == _CLOSE and depth:
            depth -= 1
    return deepest


def compile_source(source: Union[bytes, bytearray, str]) -> List[Node]:
    return Compiler().compile(source)
