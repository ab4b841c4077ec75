from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import List, Sequence, Union


# ---------------- IR Nodes ----------------
@dataclass(frozen=True)
class Output:
    pass  # '.'


@dataclass(frozen=True)
class Input:
    pass  # ','


@dataclass(frozen=True)
class Move:
    delta: int  # net >/<


@dataclass(frozen=True)
class IncValue:
    delta: int  # net +/- on current cell


@dataclass(frozen=True)
class Loop:
    body: List["Node"]


Node = Union[Output, Input, Move, IncValue, Loop]
BF_OPS = set("+-<>[],.")


# ---------------- Emit + counts ----------------
def emit(nodes: Sequence[Node]) -> str:
    out: List[str] = []
    for n in nodes:
        if isinstance(n, IncValue):
            out.append(("+" * n.delta) if n.delta > 0 else ("-" * (-n.delta)))
        elif isinstance(n, Move):
            out.append((">" * n.delta) if n.delta > 0 else ("<" * (-n.delta)))
        elif isinstance(n, Output):
            out.append(".")
        elif isinstance(n, Input):
            out.append(",")
        elif isinstance(n, Loop):
            out.append("[" + emit(n.body) + "]")
    return "".join(out)


def count_nodes(nodes: Sequence[Node]) -> int:
    """Number of tree nodes, loop nodes and their bodies included."""
    c = 0
    pending = [nodes]
    while pending:
        for n in pending.pop():
            c += 1
            if isinstance(n, Loop):
                pending.append(n.body)
    return c


def max_depth(nodes: Sequence[Node]) -> int:
    """Deepest loop nesting in the tree; 0 for straight-line code."""
    deepest = 0
    pending = [(nodes, 0)]
    while pending:
        body, depth = pending.pop()
        deepest = max(deepest, depth)
        for n in body:
            if isinstance(n, Loop):
                pending.append((n.body, depth + 1))
    return deepest


# ---------------- Recursion headroom ----------------
# compile, optimize and run each recurse once per loop level
FRAMES_PER_LEVEL = 2
RECURSION_MARGIN = 1000


def ensure_recursion_limit(depth: int) -> None:
    needed = depth * FRAMES_PER_LEVEL + RECURSION_MARGIN
    if sys.getrecursionlimit() < needed:
        sys.setrecursionlimit(needed)
