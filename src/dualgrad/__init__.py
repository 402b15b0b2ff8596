import logging

from .autodiff import Dual, diff, grad, jacobian, jacobian_t
from .function import (
    acos,
    asin,
    atan,
    cos,
    cosh,
    exp,
    log,
    pow,
    sin,
    sinh,
    sqrt,
    tan,
    tanh,
)
from .linalg import DimensionMismatch, Matrix, Vector

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "acos",
    "asin",
    "atan",
    "cos",
    "cosh",
    "exp",
    "log",
    "pow",
    "sin",
    "sinh",
    "sqrt",
    "tan",
    "tanh",
    "Dual",
    "diff",
    "grad",
    "jacobian",
    "jacobian_t",
    "DimensionMismatch",
    "Matrix",
    "Vector",
]
