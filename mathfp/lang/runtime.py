"""Runtime values and the binding environment they live in."""

import math
from dataclasses import dataclass
from decimal import Decimal

from mathfp.lang.ast import Expr
from mathfp.lang.error import ConstantError


class RuntimeValue:
    """Superclass of every value an expression can evaluate to."""


@dataclass(frozen=True)
class Number(RuntimeValue):
    value: float

    def __str__(self):
        if math.isnan(self.value):
            return "NaN"
        elif math.isinf(self.value):
            return "inf" if self.value > 0 else "-inf"

        # shortest round-tripping digits, written out without an exponent; keeps the sign of -0.0
        text = format(Decimal(repr(self.value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text


@dataclass(frozen=True)
class String(RuntimeValue):
    value: str

    def __str__(self):
        return f"\"{self.value}\""


@dataclass(frozen=True)
class Boolean(RuntimeValue):
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Function(RuntimeValue):
    """Closure over a parameter name and a body. Nothing builds these yet."""
    param: str
    body: Expr

    def __str__(self):
        return f"function ({self.param}) => {self.body!r}"


@dataclass(frozen=True)
class NilType(RuntimeValue):

    def __str__(self):
        return "nil"


Nil = NilType()


@dataclass
class Binding:
    value: RuntimeValue
    is_constant: bool = False


class Environment:
    """Maps names to values. Names bound as constants can never be rebound; anything else is overwritten freely."""
    CONSTANTS = {
        "nil": Nil,
        "true": Boolean(True),
        "false": Boolean(False),
    }

    def __init__(self):
        self.bindings = {}
        for name, value in Environment.CONSTANTS.items():
            self._bind_const(name, value)

    def _bind_const(self, name, value):
        self.bindings[name] = Binding(value, is_constant=True)

    def bind(self, name, value):
        """Binds value to name. Raises ConstantError, leaving the binding as it was, if name is a constant."""
        if self.is_constant(name):
            raise ConstantError(name)
        self.bindings[name] = Binding(value)

    def resolve(self, name):
        """Value bound to name, or None if name is not bound."""
        binding = self.bindings.get(name)
        return binding.value if binding else None

    def is_constant(self, name):
        return name in self.bindings and self.bindings[name].is_constant

    def names(self):
        return list(self.bindings)

    def __contains__(self, name):
        return name in self.bindings

    def __repr__(self):
        return f"Environment({', '.join(self.bindings)})"


def display(value):
    """Prints value to stdout the way mathfp renders it."""
    print(value)
