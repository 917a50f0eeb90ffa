from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import TextIO

from crust.errors import ErrorKind, ExecutionError
from crust.ops import Cell, IntLiteral, OpCode, TextLiteral, format_cell
from crust.program import Program

log = logging.getLogger(__name__)

Value = int | str


class StepStatus(str, Enum):
    CONTINUE = "continue"
    END = "end"


def _kind_name(value: object) -> str:
    if isinstance(value, int):
        return "int"
    if isinstance(value, str):
        return "text"
    return type(value).__name__


class Interpreter:
    """Fetch-decode-execute loop over a parsed Program.

    The instruction pointer indexes the program's flat cell sequence; the
    operand stack holds ints and strs only. Running off the end of the
    sequence is reported by `step()` as StepStatus.END, never as an error.
    """

    def __init__(
        self,
        program: Program,
        *,
        debug: bool = False,
        stdout: TextIO | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._program = program
        self._ip = 0
        self._stack: list[Value] = []
        self._stdout = stdout if stdout is not None else sys.stdout
        self._debug = bool(debug)
        self._logger = logger if logger is not None else log

    @property
    def program(self) -> Program:
        return self._program

    @property
    def ip(self) -> int:
        return self._ip

    @property
    def stack(self) -> tuple[Value, ...]:
        return tuple(self._stack)

    @property
    def debug(self) -> bool:
        return self._debug

    def run(self) -> int:
        """Step until the program ends; returns the number of executed steps."""
        steps = 0
        while self.step() is StepStatus.CONTINUE:
            steps += 1
        return steps

    def step(self) -> StepStatus:
        start = self._ip
        cell = self._next_cell()
        if cell is None:
            return StepStatus.END
        if not isinstance(cell, OpCode):
            raise ExecutionError(
                ErrorKind.INVALID_OPCODE,
                f"invalid program, not an op code: {format_cell(cell)}",
                ip=start,
            )
        try:
            self._execute(cell)
        except ExecutionError as exc:
            if exc.ip is None:
                exc.ip = start
            raise
        if self._debug:
            self._dlog("stack: %r", self.stack)
        return StepStatus.CONTINUE

    # -- dispatch ----------------------------------------------------------

    def _execute(self, op: OpCode) -> None:
        if op is OpCode.PUTLN:
            self._write("\n")
            self._dlog("putln")
        elif op is OpCode.DUP:
            value = self._peek()
            self._stack.append(value)
            self._dlog("dup %r", value)
        elif op is OpCode.PUT:
            value = self._pop()
            self._write(str(value))
            self._dlog("put %r", value)
        elif op is OpCode.JUMP:
            line = self._next_int()
            self._ip = self._jump_target(line)
            self._dlog("jump %d => %d", line, self._ip)
        elif op is OpCode.JUMPL:
            bound = self._next_int()
            line = self._next_int()
            (top,) = self._peek_values(int, 1)
            jumped = top < bound
            # a taken jump to a bad line must leave the stack intact
            target = self._jump_target(line) if jumped else None
            self._stack.pop()
            if target is not None:
                self._ip = target
            self._dlog("jump %d<%d ? %d => %d jumped=%s", top, bound, line, self._ip, jumped)
        elif op is OpCode.IPUSH:
            value = self._next_int()
            self._stack.append(value)
            self._dlog("ipush %d", value)
        elif op is OpCode.IADD:
            a, b = self._pop_values(int, 2)
            self._stack.append(a + b)
            self._dlog("iadd %d + %d = %d", a, b, a + b)
        elif op is OpCode.ISUB:
            a, b = self._pop_values(int, 2)
            self._stack.append(a - b)
            self._dlog("isub %d - %d = %d", a, b, a - b)
        elif op is OpCode.SPUSH:
            text = self._next_text()
            self._stack.append(text)
            self._dlog("spush %s", text)
        elif op is OpCode.SADD:
            a, b = self._pop_values(str, 2)
            self._stack.append(a + b)
            self._dlog("sadd %s + %s = %s", a, b, a + b)
        else:
            raise ExecutionError(ErrorKind.INVALID_OPCODE, f"invalid op code: {op!r}")

    # -- instruction stream ------------------------------------------------

    def _next_cell(self) -> Cell | None:
        if self._ip >= len(self._program.instructions):
            return None
        cell = self._program.instructions[self._ip]
        self._ip += 1
        return cell

    def _next_int(self) -> int:
        cell = self._next_cell()
        if not isinstance(cell, IntLiteral):
            raise self._bad_argument(cell, "int")
        return cell.value

    def _next_text(self) -> str:
        cell = self._next_cell()
        if not isinstance(cell, TextLiteral):
            raise self._bad_argument(cell, "text")
        return cell.value

    @staticmethod
    def _bad_argument(cell: Cell | None, expected: str) -> ExecutionError:
        if cell is None:
            return ExecutionError(
                ErrorKind.INVALID_OPCODE, f"invalid program, missing {expected} argument"
            )
        return ExecutionError(
            ErrorKind.KIND_MISMATCH, f"argument not {expected}: {format_cell(cell)}"
        )

    def _jump_target(self, line: int) -> int:
        target = self._program.offset_for_line(line)
        if target is None:
            raise ExecutionError(
                ErrorKind.INVALID_JUMP,
                f"invalid jump index: line {line} (program has {self._program.line_count} lines)",
            )
        return target

    # -- operand stack -----------------------------------------------------

    def _peek(self) -> Value:
        if not self._stack:
            raise ExecutionError(ErrorKind.STACK_UNDERFLOW, "stack is empty")
        return self._stack[-1]

    def _pop(self) -> Value:
        if not self._stack:
            raise ExecutionError(ErrorKind.STACK_UNDERFLOW, "stack is empty")
        return self._stack.pop()

    def _peek_values(self, kind: type, count: int) -> list:
        """Return the top `count` values in push order (earliest first), checking their kind."""
        if len(self._stack) < count:
            raise ExecutionError(
                ErrorKind.STACK_UNDERFLOW,
                f"stack is empty (need {count}, have {len(self._stack)})",
            )
        values = self._stack[len(self._stack) - count :]
        for v in values:
            if not isinstance(v, kind):
                expected = "int" if kind is int else "text"
                raise ExecutionError(
                    ErrorKind.KIND_MISMATCH, f"value not {expected}: {v!r} is {_kind_name(v)}"
                )
        return values

    def _pop_values(self, kind: type, count: int) -> list:
        # nothing is removed unless every value is present and of the right kind
        values = self._peek_values(kind, count)
        del self._stack[len(self._stack) - count :]
        return values

    # -- side effects ------------------------------------------------------

    def _write(self, text: str) -> None:
        self._stdout.write(text)

    def _dlog(self, msg: str, *args: object) -> None:
        if not self._debug:
            return
        self._logger.debug(msg, *args)
