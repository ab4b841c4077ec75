#!/usr/bin/env python3
"""
Command line tests: exit codes and diagnostics of `python -m bfrun`.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import subprocess

import pytest

from bfrun.cli import main

SRC_DIR = os.path.join(os.path.dirname(__file__), '..', 'src')


def run_cli(*args, input_data=b"", timeout=30):
    env = dict(os.environ)
    env['PYTHONPATH'] = os.pathsep.join(filter(None, [os.path.abspath(SRC_DIR), env.get('PYTHONPATH')]))
    return subprocess.run(
        [sys.executable, '-m', 'bfrun', *args],
        input=input_data,
        capture_output=True,
        env=env,
        timeout=timeout,
    )


def test_missing_argument(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "[ERROR] no path to the brainfuck file provided" in err
    assert "[INFO] Usage:" in err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.bf")]) == 1
    assert "[ERROR] the path does not exist" in capsys.readouterr().err


def test_compile_error(tmp_path, capsys):
    path = tmp_path / "bad.bf"
    path.write_text("++]")
    assert main([str(path)]) == 1
    assert "[COMPILE ERROR] closed a nonexistent loop on line: 1:3" in capsys.readouterr().err


def test_runs_program(tmp_path):
    path = tmp_path / "a.bf"
    path.write_text("++++++++[>++++++++<-]>+.\n")
    result = run_cli(str(path))
    assert result.returncode == 0
    assert result.stdout == b"A"
    assert result.stderr == b""


def test_reads_stdin(tmp_path):
    path = tmp_path / "cat.bf"
    path.write_text(",[.,]")
    result = run_cli(str(path), input_data=b"echo")
    assert result.returncode == 0
    assert result.stdout == b"echo"


def test_debug_output(tmp_path):
    path = tmp_path / "dbg.bf"
    path.write_text("+++>++")
    result = run_cli('--debug', str(path))
    assert result.returncode == 0
    err = result.stderr.decode()
    assert "[DEBUG] optimized 6 instructions down to 3" in err
    assert "[DEBUG] program: +++>++" in err
    assert "[DEBUG] pointer: 1" in err
    assert "[DEBUG]     0:   3   2" in err


def test_no_optimize_flag(tmp_path):
    path = tmp_path / "dbg.bf"
    path.write_text("+++.")
    result = run_cli('--debug', '--no-optimize', str(path))
    assert result.returncode == 0
    assert result.stdout == b"\x03"
    assert b"optimized" not in result.stderr


def test_infinite_loop_is_accepted(tmp_path):
    path = tmp_path / "spin.bf"
    path.write_text("+[]")
    with pytest.raises(subprocess.TimeoutExpired):
        run_cli(str(path), timeout=2)


def test_deeply_nested_program(tmp_path, capsys):
    depth = 5000
    path = tmp_path / "deep.bf"
    path.write_text("+" + "[" * depth + "-" + "]" * depth)
    assert main([str(path)]) == 0
    assert capsys.readouterr().err == ""
