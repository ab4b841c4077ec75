from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class CompilerState:
    line: int = 1
    position: int = 1
    # (symbol, line, position) for every '[' opened and every ']' that closed one
    brackets: List[Tuple[str, int, int]] = field(default_factory=list)
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def reset(self) -> None:
        self.line = 1
        self.position = 1
        self.brackets.clear()
        self.trace.clear()

    def advance(self, byte: int) -> None:
        if byte == 0x0A:
            self.line += 1
            self.position = 1
        else:
            self.position += 1

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
