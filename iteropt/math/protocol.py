"""Capability boundary for parameter, gradient and Hessian types.

Solvers never touch the arithmetic of a parameter directly. They call the
functions exported by :mod:`iteropt.math`, which dispatch on the type of the
first operand. A type is usable as a parameter when every operation a solver
needs has been registered for it. Backends for Python scalars, Python lists,
NumPy arrays and PyTorch tensors ship with the package.

New backends are added by registering implementations on the dispatchers, for
example ``iteropt.math.dot.register(MyVector)``. Objects that implement the
methods of :class:`NumericVector` work without registration.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
Scalar = float


@runtime_checkable
class NumericVector(Protocol):
    """Protocol listing the arithmetic a solver may require of a parameter.

    The operations mirror the free functions in :mod:`iteropt.math`; this
    protocol exists for documentation and static checking of user types that
    implement the arithmetic as methods.
    """

    def dot(self, other: Any) -> Any:
        """Dot product, or matrix product for two-dimensional operands."""
        ...

    def add(self: T, other: Any) -> T:
        """Pointwise sum."""
        ...

    def sub(self: T, other: Any) -> T:
        """Pointwise difference."""
        ...

    def mul(self: T, other: Any) -> T:
        """Pointwise product."""
        ...

    def div(self: T, other: Any) -> T:
        """Pointwise quotient."""
        ...

    def scaled_add(self: T, factor: Scalar, other: Any) -> T:
        """Return ``self + factor * other``."""
        ...

    def scaled_sub(self: T, factor: Scalar, other: Any) -> T:
        """Return ``self - factor * other``."""
        ...

    def norm(self) -> Scalar:
        """Euclidean norm."""
        ...

    def zero_like(self: T) -> T:
        """Zeros with the shape of ``self``."""
        ...

    def eye_like(self: T) -> T:
        """Identity with the shape of ``self``."""
        ...

    def transpose(self: T) -> T:
        """Transpose."""
        ...

    def inverse(self: T) -> T:
        """Matrix inverse; raises ``ValueError`` when singular."""
        ...

    def conj(self: T) -> T:
        """Complex conjugate."""
        ...


__all__ = ["NumericVector", "Scalar"]
