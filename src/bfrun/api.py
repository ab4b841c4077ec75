from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Union

from .compiler import Compiler
from .errors import BFError, BFFileError, BFRuntimeError
from .interpreter import Interpreter
from .ir import Node, count_nodes
from .optimizer import optimize


@dataclass(frozen=True)
class RunOptions:
    optimize: bool = True
    debug: bool = False


@dataclass(frozen=True)
class CompileResult:
    program: List[Node]
    raw_count: int
    count: int
    trace: List[str] = field(default_factory=list)


def read_source(path: Union[str, Path]) -> bytes:
    p = Path(path)
    if not p.exists():
        raise BFFileError(message="the path does not exist")
    try:
        data = p.read_bytes()
        data.decode('utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise BFFileError(message=f"the file can't be opened or it is not a file\nError message: {e}") from e
    return data


def compile_string(source: Union[bytes, str], *, options: Optional[RunOptions] = None) -> CompileResult:
    opts = RunOptions() if options is None else options
    compiler = Compiler(trace=opts.debug)
    try:
        program = compiler.compile(source)
        raw_count = count_nodes(program)
        if opts.optimize:
            program = optimize(program)
    except RecursionError as e:
        raise BFError(message=f"loops nested too deeply to compile\nError message: {e}") from e
    if opts.optimize:
        compiler.state.add_trace(f"optimized {raw_count} instructions down to {count_nodes(program)}")
    return CompileResult(
        program=program,
        raw_count=raw_count,
        count=count_nodes(program),
        trace=list(compiler.trace),
    )


def compile_file(path: Union[str, Path], *, options: Optional[RunOptions] = None) -> CompileResult:
    return compile_string(read_source(path), options=options)


def run_program(program: Sequence[Node], *, stdin: Optional[BinaryIO] = None,
                stdout: Optional[BinaryIO] = None) -> Interpreter:
    interpreter = Interpreter(stdin=stdin, stdout=stdout)
    try:
        interpreter.run(program)
    except RecursionError as e:
        raise BFRuntimeError(message=f"loops nested too deeply to run\nMessage error: {e}") from e
    return interpreter


def run_string(source: Union[bytes, str], *, stdin: Optional[BinaryIO] = None,
               stdout: Optional[BinaryIO] = None, options: Optional[RunOptions] = None) -> Interpreter:
    result = compile_string(source, options=options)
    return run_program(result.program, stdin=stdin, stdout=stdout)
