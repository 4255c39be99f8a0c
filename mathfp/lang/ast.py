"""Abstract syntax tree for mathfp. The node set is closed: the parser only ever builds the nodes below, and the evaluator
handles each of them explicitly. Unary, FunctionDef, FunctionCall and If are reserved for language features that are not
parsed yet.
"""

from dataclasses import dataclass, field
from typing import List, Union

from mathfp.lang.token import Token


class Expr:
    """Superclass of every expression node."""


@dataclass(frozen=True)
class NumberLiteral:
    value: float


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class NilLiteral:
    pass


LiteralValue = Union[NumberLiteral, StringLiteral, BooleanLiteral, NilLiteral]


@dataclass(frozen=True)
class Program(Expr):
    statements: List[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    op: Token
    right: Expr


@dataclass(frozen=True)
class Unary(Expr):
    op: Token
    right: Expr


@dataclass(frozen=True)
class Grouping(Expr):
    expr: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: str


@dataclass(frozen=True)
class Binding(Expr):
    name: str
    expr: Expr


@dataclass(frozen=True)
class Literal(Expr):
    value: LiteralValue


@dataclass(frozen=True)
class FunctionDef(Expr):
    param: str
    body: Expr


@dataclass(frozen=True)
class FunctionCall(Expr):
    func: Expr
    arg: Expr


@dataclass(frozen=True)
class If(Expr):
    cond_expr: Expr
    then_expr: Expr
    else_expr: Expr


@dataclass(frozen=True)
class Empty(Expr):
    """A statement with nothing in it, e.g. a blank line."""
