"""Arithmetic capability layer for parameters, gradients and Hessians.

Example
-------
>>> import numpy as np
>>> from iteropt import math as im
>>> im.scaled_add(np.array([1.0, 2.0]), 0.5, np.array([2.0, 2.0]))
array([2., 3.])
>>> im.dot([1.0, 2.0], [3.0, 4.0])
11.0
"""

# Importing the backends registers them with the dispatchers.
from . import _numpy, _primitives, _torch, _vec  # noqa: F401
from .ops import (
    add,
    conj,
    div,
    dot,
    eye,
    eye_like,
    inverse,
    maximum,
    minimum,
    mul,
    norm,
    rand_from_range,
    register_constructors,
    scaled_add,
    scaled_sub,
    sub,
    transpose,
    zero,
    zero_like,
)
from .protocol import NumericVector, Scalar

__all__ = [
    "NumericVector",
    "Scalar",
    "add",
    "conj",
    "div",
    "dot",
    "eye",
    "eye_like",
    "inverse",
    "maximum",
    "minimum",
    "mul",
    "norm",
    "rand_from_range",
    "register_constructors",
    "scaled_add",
    "scaled_sub",
    "sub",
    "transpose",
    "zero",
    "zero_like",
]
