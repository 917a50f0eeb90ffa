from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    # parse stage
    INVALID_INSTRUCTION = "invalid_instruction"
    INVALID_INTEGER = "invalid_integer"
    END_OF_PROGRAM = "end_of_program"
    FILE = "file"
    USAGE = "usage"

    # execution stage
    STACK_UNDERFLOW = "stack_underflow"
    KIND_MISMATCH = "kind_mismatch"
    INVALID_JUMP = "invalid_jump"
    INVALID_OPCODE = "invalid_opcode"


class CrustError(Exception):
    """Base error carrying a kind tag plus a chain of context strings.

    Layers annotate an error with `wrap()` on the way up instead of
    replacing it, so the kind needed for exit-code mapping survives.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = str(message)
        self.context: list[str] = []
        super().__init__(self.message)

    def wrap(self, context: str) -> CrustError:
        self.context.insert(0, context)
        return self

    def __str__(self) -> str:
        return ": ".join([*self.context, self.message])


class ParseError(CrustError):
    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        token: str | None = None,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        self.token = token
        self.line = line
        self.col = col
        prefix = ""
        if line is not None and col is not None:
            prefix = f"line {line} col {col}: "
        super().__init__(kind, prefix + str(message))


class ProgramFileError(CrustError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.FILE, message)


class ExecutionError(CrustError):
    def __init__(self, kind: ErrorKind, message: str, *, ip: int | None = None) -> None:
        self.ip = ip
        super().__init__(kind, message)
