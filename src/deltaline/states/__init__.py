"""Ready-made state values for DELTALINE time machines."""

from deltaline.states.arithmetic import ArithmeticState, Delta, Op, add, div, mul, sub
from deltaline.states.array import ArrayPatch, ArrayState
from deltaline.states.mapping import DeleteKey, MappingState, RestoreKey, SetKey

__all__ = [
    "ArithmeticState",
    "ArrayPatch",
    "ArrayState",
    "DeleteKey",
    "Delta",
    "MappingState",
    "Op",
    "RestoreKey",
    "SetKey",
    "add",
    "div",
    "mul",
    "sub",
]
