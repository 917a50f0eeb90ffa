from __future__ import annotations

import io
from pathlib import Path
from typing import TextIO

from crust.interpreter import Interpreter
from crust.program import Program


def parse_source(*, src: str) -> Program:
    return Program.from_source(src)


def run_source(*, src: str, debug: bool = False) -> str:
    """Parse and run `src`, returning everything the program printed."""
    out = io.StringIO()
    Interpreter(parse_source(src=src), debug=debug, stdout=out).run()
    return out.getvalue()


def run_file(path: str | Path, *, debug: bool = False, stdout: TextIO | None = None) -> int:
    program = Program.from_file(path)
    return Interpreter(program, debug=debug, stdout=stdout).run()
