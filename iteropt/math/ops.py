"""Type-dispatched arithmetic used by every solver.

Each function dispatches on the type of its first argument. Types without a
registered implementation fall back to a method of the same name on the
object (see :class:`iteropt.math.protocol.NumericVector`).
"""

from __future__ import annotations

from functools import singledispatch
from typing import Any, Callable, Dict, Optional


def _delegate(name: str, obj: Any, *args: Any) -> Any:
    method = getattr(obj, name, None)
    if method is None or not callable(method):
        raise TypeError(f"'{name}' is not supported for type {type(obj).__name__}")
    return method(*args)


@singledispatch
def dot(a: Any, b: Any) -> Any:
    """Dot product of ``a`` and ``b``; matrix product for 2-D operands."""
    return _delegate("dot", a, b)


@singledispatch
def add(a: Any, b: Any) -> Any:
    """Pointwise ``a + b``."""
    return _delegate("add", a, b)


@singledispatch
def sub(a: Any, b: Any) -> Any:
    """Pointwise ``a - b``."""
    return _delegate("sub", a, b)


@singledispatch
def mul(a: Any, b: Any) -> Any:
    """Pointwise ``a * b``."""
    return _delegate("mul", a, b)


@singledispatch
def div(a: Any, b: Any) -> Any:
    """Pointwise ``a / b``."""
    return _delegate("div", a, b)


@singledispatch
def scaled_add(a: Any, factor: Any, b: Any) -> Any:
    """Return ``a + factor * b``."""
    return _delegate("scaled_add", a, factor, b)


@singledispatch
def scaled_sub(a: Any, factor: Any, b: Any) -> Any:
    """Return ``a - factor * b``."""
    return _delegate("scaled_sub", a, factor, b)


@singledispatch
def norm(a: Any) -> float:
    """Euclidean (Frobenius for matrices) norm."""
    return _delegate("norm", a)


@singledispatch
def zero_like(a: Any) -> Any:
    """Zeros with the shape and type of ``a``."""
    return _delegate("zero_like", a)


@singledispatch
def eye_like(a: Any) -> Any:
    """Identity matrix with the shape and type of the square matrix ``a``."""
    return _delegate("eye_like", a)


@singledispatch
def transpose(a: Any) -> Any:
    """Transpose of ``a``; vectors and scalars are returned unchanged."""
    return _delegate("transpose", a)


@singledispatch
def inverse(a: Any) -> Any:
    """Inverse of ``a``.

    Raises:
        ValueError: If ``a`` is singular.
    """
    return _delegate("inverse", a)


@singledispatch
def minimum(a: Any, b: Any) -> Any:
    """Pointwise minimum."""
    return _delegate("minimum", a, b)


@singledispatch
def maximum(a: Any, b: Any) -> Any:
    """Pointwise maximum."""
    return _delegate("maximum", a, b)


@singledispatch
def conj(a: Any) -> Any:
    """Complex conjugate."""
    return _delegate("conj", a)


@singledispatch
def rand_from_range(low: Any, high: Any, rng: Optional[Any] = None) -> Any:
    """Uniform random sample drawn pointwise from ``[low, high)``."""
    return _delegate("rand_from_range", low, high, rng)


# Constructors that take a type instead of an instance.
_ZERO: Dict[type, Callable[[], Any]] = {}
_EYE: Dict[type, Callable[[int], Any]] = {}


def register_constructors(
    kind: type, zero_factory: Callable[[], Any], eye_factory: Callable[[int], Any]
) -> None:
    """Register ``zero`` and ``eye`` constructors for ``kind``."""
    _ZERO[kind] = zero_factory
    _EYE[kind] = eye_factory


def _lookup(table: Dict[type, Callable[..., Any]], kind: type, name: str) -> Callable:
    for klass in kind.__mro__:
        if klass in table:
            return table[klass]
    raise TypeError(f"'{name}' is not supported for type {kind.__name__}")


def zero(kind: type = float) -> Any:
    """Return the empty/zero value of ``kind``."""
    return _lookup(_ZERO, kind, "zero")()


def eye(n: int, kind: type = list) -> Any:
    """Return an ``n`` x ``n`` identity matrix of ``kind``."""
    if n < 0:
        raise ValueError("n must be non-negative")
    return _lookup(_EYE, kind, "eye")(n)


__all__ = [
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
