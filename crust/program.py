from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from crust.errors import CrustError, ErrorKind, ParseError, ProgramFileError
from crust.ops import ArgKind, Cell, IntLiteral, Signature, TextLiteral, lookup_signature

_TOKEN_RE = re.compile(r"\S+")
_INT_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


@dataclass(frozen=True, slots=True)
class Token:
    text: str
    line: int
    col: int


def tokenize(lines: Iterable[str]) -> Iterator[Token]:
    """Yield whitespace-separated tokens; line breaks carry no meaning beyond location."""
    for lineno, text in enumerate(lines, start=1):
        for m in _TOKEN_RE.finditer(text):
            yield Token(text=m.group(0), line=lineno, col=m.start() + 1)


def parse_int(token: Token) -> int:
    if not _INT_RE.fullmatch(token.text):
        raise ParseError(
            ErrorKind.INVALID_INTEGER,
            f"invalid integer {token.text!r}",
            token=token.text,
            line=token.line,
            col=token.col,
        )
    value = int(token.text)
    if not INT_MIN <= value <= INT_MAX:
        raise ParseError(
            ErrorKind.INVALID_INTEGER,
            f"integer out of range {token.text!r}",
            token=token.text,
            line=token.line,
            col=token.col,
        )
    return value


def _parse_argument(kind: ArgKind, tokens: Iterator[Token], *, owner: Token) -> Cell:
    token = next(tokens, None)
    if token is None:
        raise ParseError(
            ErrorKind.END_OF_PROGRAM,
            f"end of program while reading {kind.value} argument of {owner.text!r}",
            token=owner.text,
            line=owner.line,
            col=owner.col,
        )
    if kind is ArgKind.INT:
        return IntLiteral(parse_int(token))
    return TextLiteral(token.text)


def _parse_op(token: Token, tokens: Iterator[Token]) -> list[Cell]:
    signature: Signature | None = lookup_signature(token.text)
    if signature is None:
        raise ParseError(
            ErrorKind.INVALID_INSTRUCTION,
            f"invalid instruction {token.text}",
            token=token.text,
            line=token.line,
            col=token.col,
        )
    cells: list[Cell] = [signature.op]
    for kind in signature.args:
        cells.append(_parse_argument(kind, tokens, owner=token))
    return cells


def parse_program(lines: Iterable[str]) -> tuple[list[Cell], list[int]]:
    """Parse source lines into a flat cell sequence and a per-line jump table.

    Each "line" is one mnemonic plus its arguments. The jump table records
    the offset of that line's opcode cell, so entry k-1 is where a jump to
    line k lands.
    """
    instructions: list[Cell] = []
    jump_table: list[int] = []
    tokens = tokenize(lines)
    for token in tokens:
        try:
            cells = _parse_op(token, tokens)
        except ParseError as exc:
            raise exc.wrap("unable to parse op code")
        jump_table.append(len(instructions))
        instructions.extend(cells)
    return instructions, jump_table


@dataclass(frozen=True, slots=True)
class Program:
    instructions: tuple[Cell, ...] = ()
    jump_table: tuple[int, ...] = ()

    @classmethod
    def from_reader(cls, reader: TextIO | Iterable[str]) -> Program:
        try:
            instructions, jump_table = parse_program(reader)
        except CrustError as exc:
            raise exc.wrap("unable to parse program")
        return cls(instructions=tuple(instructions), jump_table=tuple(jump_table))

    @classmethod
    def from_source(cls, src: str) -> Program:
        return cls.from_reader(src.splitlines())

    @classmethod
    def from_file(cls, path: str | Path) -> Program:
        try:
            f = open(path, encoding="utf-8")
        except OSError as exc:
            raise ProgramFileError(f"unable to open program file: {exc}") from exc
        with f:
            try:
                return cls.from_reader(f)
            except UnicodeDecodeError as exc:
                raise ProgramFileError(f"unable to read program file: {exc}") from exc

    @property
    def line_count(self) -> int:
        return len(self.jump_table)

    def offset_for_line(self, line: int) -> int | None:
        index = line - 1
        if index < 0 or index >= len(self.jump_table):
            return None
        return self.jump_table[index]

    def __len__(self) -> int:
        return len(self.instructions)
