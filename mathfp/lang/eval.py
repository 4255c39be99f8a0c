"""Tree-walking evaluator for mathfp. evaluate threads one Environment through every nested call; bindings are the only
thing that mutates it, strictly in program order. Unlike scanning and parsing, evaluation stops at the first error.
"""

import math
import operator

from mathfp.lang.ast import (Binary, Binding, BooleanLiteral, Empty, FunctionCall, FunctionDef, Grouping, If, Literal,
                             NilLiteral, NumberLiteral, Program, StringLiteral, Unary, Variable)
from mathfp.lang.error import EvalError
from mathfp.lang.runtime import Boolean, Nil, Number, String
from mathfp.lang.token import TokenType


def divide(left, right):
    """Float division that follows IEEE 754 on a zero divisor (inf, -inf or nan) instead of raising."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


OPERATORS = {
    TokenType.PLUS: operator.add,
    TokenType.MINUS: operator.sub,
    TokenType.STAR: operator.mul,
    TokenType.SLASH: divide,
}

UNSUPPORTED = (FunctionDef, FunctionCall, If, Unary)


def evaluate(expr, env):
    """Evaluates expr against env and returns the resulting RuntimeValue. Raises EvalError on the first runtime error."""
    if isinstance(expr, Program):
        result = Nil
        for stmt in expr.statements:
            result = evaluate(stmt, env)
        return result

    elif isinstance(expr, Literal):
        return literal(expr.value)

    elif isinstance(expr, Binary):
        left = as_number(evaluate(expr.left, env))
        right = as_number(evaluate(expr.right, env))
        return Number(apply(expr.op.kind, left, right))

    elif isinstance(expr, Grouping):
        return evaluate(expr.expr, env)

    elif isinstance(expr, Binding):
        env.bind(expr.name, evaluate(expr.expr, env))
        return Nil

    elif isinstance(expr, Variable):
        value = env.resolve(expr.name)
        if value is None:
            raise EvalError("Name '{}' is not defined", expr.name)
        return value

    elif isinstance(expr, Empty):
        return Nil

    elif isinstance(expr, UNSUPPORTED):
        raise NotImplementedError(f"evaluation of {type(expr).__name__} expressions is not implemented")

    raise TypeError(f"not a mathfp expression: {expr!r}")


def literal(value):
    if isinstance(value, NumberLiteral):
        return Number(float(value.value))
    elif isinstance(value, StringLiteral):
        return String(value.value)
    elif isinstance(value, BooleanLiteral):
        return Boolean(value.value)
    elif isinstance(value, NilLiteral):
        return Nil
    raise TypeError(f"not a mathfp literal: {value!r}")


def as_number(value):
    """Float operand of a binary expression. Booleans count as 1.0 and 0.0."""
    if isinstance(value, Number):
        return value.value
    elif isinstance(value, Boolean):
        return 1.0 if value.value else 0.0
    raise EvalError("Operands for binary expressions must be numbers, got {}", str(value))


def apply(kind, left, right):
    if kind not in OPERATORS:
        raise TypeError(f"not a binary operator: {kind}")
    return OPERATORS[kind](left, right)
