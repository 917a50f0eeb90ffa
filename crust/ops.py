from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OpCode(Enum):
    PUTLN = 1  # print "\n"
    DUP = 2  # duplicate the top of the stack
    PUT = 3  # pop and print the top of the stack
    JUMP = 4  # (line) jump to line number
    JUMPL = 5  # (value, line) pop top; jump to line if top < value

    IPUSH = 11  # (value) push integer
    IADD = 12  # pop b, a; push a + b
    ISUB = 14  # pop b, a; push a - b

    SPUSH = 21  # (value) push text
    SADD = 22  # pop b, a; push a + b

    @property
    def mnemonic(self) -> str:
        return self.name.lower()


class ArgKind(str, Enum):
    INT = "int"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class Signature:
    op: OpCode
    args: tuple[ArgKind, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.args)


@dataclass(frozen=True, slots=True)
class IntLiteral:
    value: int


@dataclass(frozen=True, slots=True)
class TextLiteral:
    value: str


Cell = OpCode | IntLiteral | TextLiteral


SIGNATURES: dict[str, Signature] = {
    "putln": Signature(OpCode.PUTLN),
    "dup": Signature(OpCode.DUP),
    "put": Signature(OpCode.PUT),
    "jump": Signature(OpCode.JUMP, (ArgKind.INT,)),
    "jumpl": Signature(OpCode.JUMPL, (ArgKind.INT, ArgKind.INT)),
    "ipush": Signature(OpCode.IPUSH, (ArgKind.INT,)),
    "iadd": Signature(OpCode.IADD),
    "isub": Signature(OpCode.ISUB),
    "spush": Signature(OpCode.SPUSH, (ArgKind.TEXT,)),
    "sadd": Signature(OpCode.SADD),
}


def lookup_signature(mnemonic: str) -> Signature | None:
    return SIGNATURES.get(mnemonic)


def format_cell(cell: Cell) -> str:
    if isinstance(cell, OpCode):
        return cell.mnemonic
    if isinstance(cell, IntLiteral):
        return str(cell.value)
    return repr(cell.value)
