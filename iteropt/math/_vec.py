"""Pure Python list backend.

Vectors are lists of scalars, matrices are lists of equally long row lists.
Elementwise operations recurse through the dispatchers so nested rows work
without special cases.
"""

from __future__ import annotations

import math
from typing import Any, Callable, List, Optional

import numpy as np

from . import ops


def _is_matrix(a: List[Any]) -> bool:
    return len(a) > 0 and isinstance(a[0], list)


def _zip_checked(a: List[Any], b: List[Any]):
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} and {len(b)}")
    return zip(a, b)


def _pointwise(fn: Callable[[Any, Any], Any], a: List[Any], b: Any) -> List[Any]:
    if isinstance(b, list):
        return [fn(x, y) for x, y in _zip_checked(a, b)]
    return [fn(x, b) for x in a]


@ops.dot.register
def _(a: list, b: Any) -> Any:
    if not isinstance(b, list):
        return [ops.mul(x, b) for x in a]
    if _is_matrix(a) and _is_matrix(b):
        cols = list(zip(*b))
        return [[sum(x * y for x, y in _zip_checked(row, col)) for col in cols] for row in a]
    if _is_matrix(a):
        return [sum(x * y for x, y in _zip_checked(row, b)) for row in a]
    return sum(x * y for x, y in _zip_checked(a, b))


@ops.add.register
def _(a: list, b: Any) -> List[Any]:
    return _pointwise(ops.add, a, b)


@ops.sub.register
def _(a: list, b: Any) -> List[Any]:
    return _pointwise(ops.sub, a, b)


@ops.mul.register
def _(a: list, b: Any) -> List[Any]:
    return _pointwise(ops.mul, a, b)


@ops.div.register
def _(a: list, b: Any) -> List[Any]:
    return _pointwise(ops.div, a, b)


@ops.scaled_add.register
def _(a: list, factor: Any, b: list) -> List[Any]:
    return [ops.scaled_add(x, factor, y) for x, y in _zip_checked(a, b)]


@ops.scaled_sub.register
def _(a: list, factor: Any, b: list) -> List[Any]:
    return [ops.scaled_sub(x, factor, y) for x, y in _zip_checked(a, b)]


@ops.norm.register
def _(a: list) -> float:
    if _is_matrix(a):
        return math.sqrt(sum(ops.norm(row) ** 2 for row in a))
    return math.sqrt(sum(abs(x) ** 2 for x in a))


@ops.zero_like.register
def _(a: list) -> List[Any]:
    return [ops.zero_like(x) for x in a]


@ops.eye_like.register
def _(a: list) -> List[List[Any]]:
    if not _is_matrix(a) or any(len(row) != len(a) for row in a):
        raise ValueError("eye_like requires a square matrix")
    return _eye(len(a))


@ops.transpose.register
def _(a: list) -> List[Any]:
    if _is_matrix(a):
        return [list(col) for col in zip(*a)]
    return list(a)


@ops.inverse.register
def _(a: list) -> List[List[Any]]:
    if not _is_matrix(a):
        raise ValueError("inverse requires a square matrix")
    try:
        return np.linalg.inv(np.asarray(a)).tolist()
    except np.linalg.LinAlgError as exc:
        raise ValueError("Matrix is singular.") from exc


@ops.minimum.register
def _(a: list, b: list) -> List[Any]:
    return [ops.minimum(x, y) for x, y in _zip_checked(a, b)]


@ops.maximum.register
def _(a: list, b: list) -> List[Any]:
    return [ops.maximum(x, y) for x, y in _zip_checked(a, b)]


@ops.conj.register
def _(a: list) -> List[Any]:
    return [ops.conj(x) for x in a]


@ops.rand_from_range.register
def _(low: list, high: list, rng: Optional[Any] = None) -> List[Any]:
    rng = rng if rng is not None else np.random.default_rng()
    return [ops.rand_from_range(lo, hi, rng) for lo, hi in _zip_checked(low, high)]


def _eye(n: int) -> List[List[float]]:
    return [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]


ops.register_constructors(list, list, _eye)
