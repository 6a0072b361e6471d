from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal as TypingLiteral, Tuple, Union

LiteralKind = TypingLiteral["int", "number", "str", "date", "bool", "null"]

COMPARISON_OPS = ("eq", "ne", "gt", "ge", "lt", "le")
LOGICAL_OPS = ("and", "or")


@dataclass(frozen=True, slots=True)
class FieldRef:
    name: str


@dataclass(frozen=True, slots=True)
class Literal:
    value: Any
    kind: LiteralKind


@dataclass(frozen=True, slots=True)
class Compare:
    op: str
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Logical:
    op: str
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Not:
    operand: Expr


@dataclass(frozen=True, slots=True)
class Call:
    name: str
    args: Tuple[Expr, ...]


Expr = Union[FieldRef, Literal, Compare, Logical, Not, Call]
