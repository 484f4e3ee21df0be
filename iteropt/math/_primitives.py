"""Scalar backend: Python ints, floats and complex numbers (and NumPy scalars)."""

from __future__ import annotations

import numbers
from typing import Any, Optional

import numpy as np

from . import ops


@ops.dot.register
def _(a: numbers.Number, b: Any) -> Any:
    if isinstance(b, numbers.Number):
        return a * b
    # scalar times vector
    return ops.mul(b, a)


@ops.add.register
def _(a: numbers.Number, b: numbers.Number) -> Any:
    return a + b


@ops.sub.register
def _(a: numbers.Number, b: numbers.Number) -> Any:
    return a - b


@ops.mul.register
def _(a: numbers.Number, b: numbers.Number) -> Any:
    return a * b


@ops.div.register
def _(a: numbers.Number, b: numbers.Number) -> Any:
    return a / b


@ops.scaled_add.register
def _(a: numbers.Number, factor: numbers.Number, b: numbers.Number) -> Any:
    return a + factor * b


@ops.scaled_sub.register
def _(a: numbers.Number, factor: numbers.Number, b: numbers.Number) -> Any:
    return a - factor * b


@ops.norm.register
def _(a: numbers.Number) -> float:
    return float(abs(a))


@ops.zero_like.register
def _(a: numbers.Number) -> Any:
    return type(a)(0)


@ops.eye_like.register
def _(a: numbers.Number) -> Any:
    return type(a)(1)


@ops.transpose.register
def _(a: numbers.Number) -> Any:
    return a


@ops.inverse.register
def _(a: numbers.Number) -> Any:
    if a == 0:
        raise ValueError("Scalar zero has no inverse.")
    return 1 / a


@ops.minimum.register
def _(a: numbers.Number, b: numbers.Number) -> Any:
    return a if a <= b else b


@ops.maximum.register
def _(a: numbers.Number, b: numbers.Number) -> Any:
    return a if a >= b else b


@ops.conj.register
def _(a: numbers.Number) -> Any:
    return a.conjugate()


@ops.rand_from_range.register
def _(low: numbers.Number, high: numbers.Number, rng: Optional[Any] = None) -> float:
    if low == high:
        return low
    lo, hi = (low, high) if low < high else (high, low)
    rng = rng if rng is not None else np.random.default_rng()
    return float(rng.uniform(lo, hi))


ops.register_constructors(float, lambda: 0.0, lambda n: 1.0)
ops.register_constructors(int, lambda: 0, lambda n: 1)
ops.register_constructors(complex, lambda: 0j, lambda n: 1 + 0j)
