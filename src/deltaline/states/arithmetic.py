"""ArithmeticState: a single number changed by +, -, * and /."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from numbers import Real


class Op(enum.Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"

    @property
    def inverse(self) -> Op:
        return _INVERSE[self]


_INVERSE = {
    Op.ADD: Op.SUB,
    Op.SUB: Op.ADD,
    Op.MUL: Op.DIV,
    Op.DIV: Op.MUL,
}


@dataclass(frozen=True)
class Delta:
    """One arithmetic step.

    ``remainder`` is only non-zero on the reverse of an integer division;
    it is added back after multiplying so the original value is restored
    exactly.  ``restore`` is only set on the reverse of a step that is not
    pure ``int`` arithmetic: it holds the prior value, which undo assigns
    verbatim instead of recomputing it with the dual operation.
    """

    op: Op
    operand: Real
    remainder: Real = 0
    restore: Real | None = None

    def __post_init__(self) -> None:
        if self.op in (Op.MUL, Op.DIV) and self.operand == 0:
            raise ValueError(f"{self.op.name} by zero cannot be reversed")


def add(n: Real) -> Delta:
    return Delta(Op.ADD, n)


def sub(n: Real) -> Delta:
    return Delta(Op.SUB, n)


def mul(n: Real) -> Delta:
    return Delta(Op.MUL, n)


def div(n: Real) -> Delta:
    return Delta(Op.DIV, n)


@dataclass
class ArithmeticState:
    """A number mutated in place by :class:`Delta` steps.

    Steps on two ints are undone with the dual operation, and division of
    two ints is floor division whose reverse keeps the remainder.  Any other
    combination (floats, ``Decimal``, mixed) is undone by restoring the
    previous value, since recomputing it would round.
    """

    value: Real = 0

    def apply_forward(self, delta: Delta) -> Delta:
        op, n = delta.op, delta.operand
        prior = self.value
        exact = isinstance(prior, int) and isinstance(n, int)

        if op is Op.ADD:
            self.value = prior + n
        elif op is Op.SUB:
            self.value = prior - n
        elif op is Op.MUL:
            self.value = prior * n + delta.remainder
        elif exact:
            quotient, remainder = divmod(prior, n)
            self.value = quotient
            return Delta(Op.MUL, n, remainder)
        else:
            self.value = prior / n

        if exact:
            return Delta(op.inverse, n)
        return Delta(op.inverse, n, restore=prior)

    def apply_reverse(self, delta: Delta) -> None:
        if delta.restore is not None:
            self.value = delta.restore
            return
        self.apply_forward(delta)
