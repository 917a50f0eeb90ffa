from __future__ import annotations

from crust.ops import SIGNATURES, ArgKind, IntLiteral, OpCode, TextLiteral, format_cell, lookup_signature


def test_signature_table_matches_instruction_set() -> None:
    expected = {
        "putln": (1, ()),
        "dup": (2, ()),
        "put": (3, ()),
        "jump": (4, (ArgKind.INT,)),
        "jumpl": (5, (ArgKind.INT, ArgKind.INT)),
        "ipush": (11, (ArgKind.INT,)),
        "iadd": (12, ()),
        "isub": (14, ()),
        "spush": (21, (ArgKind.TEXT,)),
        "sadd": (22, ()),
    }
    got = {name: (sig.op.value, sig.args) for name, sig in SIGNATURES.items()}
    assert got == expected


def test_mnemonic_round_trips_through_table() -> None:
    for name, sig in SIGNATURES.items():
        assert sig.op.mnemonic == name
        assert lookup_signature(name) is sig


def test_lookup_is_case_sensitive() -> None:
    assert lookup_signature("PUT") is None
    assert lookup_signature("") is None


def test_opcode_is_not_an_int() -> None:
    assert not isinstance(OpCode.IPUSH, int)


def test_format_cell() -> None:
    assert format_cell(OpCode.JUMPL) == "jumpl"
    assert format_cell(IntLiteral(-3)) == "-3"
    assert format_cell(TextLiteral("hi")) == "'hi'"
