from __future__ import annotations

from typing import List, Sequence

from .ir import IncValue, Loop, Move, Node, ensure_recursion_limit, max_depth


def optimize(nodes: Sequence[Node]) -> List[Node]:
    """
    Combine adjacent IncValue/IncValue and Move/Move, recursing into loops.

    Single pass over immediate neighbours only. Folds that sum to zero stay
    in the tree as IncValue(0) / Move(0).
    """
    ensure_recursion_limit(max_depth(nodes))
    return _fold(nodes)


def _fold(nodes: Sequence[Node]) -> List[Node]:
    out: List[Node] = []
    for n in nodes:
        last = out[-1] if out else None
        if isinstance(n, Loop):
            out.append(Loop(_fold(n.body)))
        elif isinstance(n, IncValue) and isinstance(last, IncValue):
            out[-1] = IncValue(last.delta + n.delta)
        elif isinstance(n, Move) and isinstance(last, Move):
            out[-1] = Move(last.delta + n.delta)
        else:
            out.append(n)
    return out
