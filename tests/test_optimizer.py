#!/usr/bin/env python3
"""
Optimizer tests: run folding, loop recursion and tree shape.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfrun import IncValue, Input, Loop, Move, Output, compile_source, emit, optimize


def _io_shape(nodes):
    out = []
    for n in nodes:
        if isinstance(n, Loop):
            out.append(('loop', _io_shape(n.body)))
        elif isinstance(n, (Output, Input)):
            out.append(type(n).__name__)
    return out


def test_folds_runs():
    assert optimize(compile_source("+++>>><<.")) == [IncValue(3), Move(1), Output()]


def test_folds_inside_loops():
    program = optimize(compile_source("++++[>+++++<--[-]]"))
    assert program == [
        IncValue(4),
        Loop([Move(1), IncValue(5), Move(-1), IncValue(-2), Loop([IncValue(-1)])]),
    ]


def test_zero_folds_are_kept():
    assert optimize(compile_source("+-")) == [IncValue(0)]
    assert optimize(compile_source("><.")) == [Move(0), Output()]


def test_io_and_loops_break_runs():
    program = optimize(compile_source("++.++[]++,>>"))
    assert program == [IncValue(2), Output(), IncValue(2), Loop([]), IncValue(2), Input(), Move(2)]


def test_large_runs_are_not_reduced():
    assert optimize(compile_source("+" * 300)) == [IncValue(300)]
    assert optimize(compile_source("<" * 40000)) == [Move(-40000)]


def test_idempotent():
    for src in ["+-+-><", "++[>+<-]>.", "[[+-]>><<]", ",[.,]", "+>+<-"]:
        once = optimize(compile_source(src))
        assert optimize(once) == once


def test_preserves_io_and_loop_order():
    src = ",>+[<.>-[+.]>>],+."
    assert _io_shape(optimize(compile_source(src))) == _io_shape(compile_source(src))


def test_input_not_mutated():
    raw = compile_source("++>>")
    optimize(raw)
    assert raw == [IncValue(1), IncValue(1), Move(1), Move(1)]


def test_emit_round_trip():
    program = optimize(compile_source("+++[>--<-]>."))
    assert emit(program) == "+++[>--<-]>."
    assert optimize(compile_source(emit(program))) == program
