from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Optional


def _build_context(lines: List[str], line_no_1: int, position: Optional[int] = None, *, context: int = 2) -> str:
    idx = min(max(1, line_no_1), max(1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx and position is not None:
            out.append(f"       | {' ' * (max(1, position) - 1)}^")
    return "\n".join(out)


def _hint_for(message: str) -> Optional[str]:
    msg = message.lower()
    if 'closed a nonexistent loop' in msg:
        return 'This "]" has no matching "[" before it. Remove it or add the missing "[".'
    if 'opened a nonexistent loop' in msg:
        return 'This "[" is never closed. Add the missing "]".'
    return None


@dataclass
class BFError(Exception):
    message: str

    tag: ClassVar[str] = 'ERROR'

    def __str__(self) -> str:
        return self.message


@dataclass
class BFConfigError(BFError):
    pass


@dataclass
class BFFileError(BFError):
    pass


@dataclass
class BFCompileError(BFError):
    line: int
    position: int
    context: str

    tag: ClassVar[str] = 'COMPILE ERROR'


@dataclass
class BFRuntimeError(BFError):
    tag: ClassVar[str] = 'RUNTIME ERROR'


def make_compile_error(*, message: str, source: bytes, line: int, position: int) -> BFCompileError:
    lines = source.decode('utf-8', errors='replace').split('\n')
    ctx = _build_context(lines, line, position)
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFCompileError(
        message=f"{message} on line: {line}:{position}\n{ctx}{hint_block}",
        line=line,
        position=position,
        context=ctx,
    )
