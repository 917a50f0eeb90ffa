from __future__ import annotations

from crust.api import parse_source, run_file, run_source
from crust.errors import (
    CrustError,
    ErrorKind,
    ExecutionError,
    ParseError,
    ProgramFileError,
)
from crust.interpreter import Interpreter, StepStatus
from crust.ops import SIGNATURES, ArgKind, IntLiteral, OpCode, Signature, TextLiteral
from crust.program import Program, parse_program, tokenize

__all__ = [
    "__version__",
    # Program
    "Program",
    "parse_program",
    "tokenize",
    # Interpreter
    "Interpreter",
    "StepStatus",
    # Instruction set
    "OpCode",
    "ArgKind",
    "Signature",
    "SIGNATURES",
    "IntLiteral",
    "TextLiteral",
    # Errors
    "CrustError",
    "ErrorKind",
    "ParseError",
    "ProgramFileError",
    "ExecutionError",
    # Convenience
    "parse_source",
    "run_source",
    "run_file",
]

__version__ = "0.1.0"
