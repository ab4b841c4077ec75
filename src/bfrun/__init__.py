from .compiler import Compiler, compile_source
from .optimizer import optimize
from .interpreter import Interpreter, TAPE_SIZE, CELL_MODULUS
from .ir import IncValue, Input, Loop, Move, Output, emit, count_nodes
from .errors import BFError, BFConfigError, BFFileError, BFCompileError, BFRuntimeError
from .api import RunOptions, CompileResult, compile_string, compile_file, read_source, run_program, run_string

__all__ = [
    'Compiler',
    'compile_source',
    'optimize',
    'Interpreter',
    'TAPE_SIZE',
    'CELL_MODULUS',
    'IncValue',
    'Input',
    'Loop',
    'Move',
    'Output',
    'emit',
    'count_nodes',
    'BFError',
    'BFConfigError',
    'BFFileError',
    'BFCompileError',
    'BFRuntimeError',
    'RunOptions',
    'CompileResult',
    'compile_string',
    'compile_file',
    'read_source',
    'run_program',
    'run_string',
]
