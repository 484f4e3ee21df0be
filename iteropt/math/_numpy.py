"""NumPy backend."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from . import ops


def _scalar_or_array(value: Any) -> Any:
    if np.ndim(value) == 0:
        return np.asarray(value).item()
    return value


@ops.dot.register
def _(a: np.ndarray, b: Any) -> Any:
    return _scalar_or_array(np.dot(a, b))


@ops.add.register
def _(a: np.ndarray, b: Any) -> np.ndarray:
    return a + b


@ops.sub.register
def _(a: np.ndarray, b: Any) -> np.ndarray:
    return a - b


@ops.mul.register
def _(a: np.ndarray, b: Any) -> np.ndarray:
    return a * b


@ops.div.register
def _(a: np.ndarray, b: Any) -> np.ndarray:
    return a / b


@ops.scaled_add.register
def _(a: np.ndarray, factor: Any, b: Any) -> np.ndarray:
    return a + factor * b


@ops.scaled_sub.register
def _(a: np.ndarray, factor: Any, b: Any) -> np.ndarray:
    return a - factor * b


@ops.norm.register
def _(a: np.ndarray) -> float:
    return float(np.linalg.norm(a))


@ops.zero_like.register
def _(a: np.ndarray) -> np.ndarray:
    return np.zeros_like(a)


@ops.eye_like.register
def _(a: np.ndarray) -> np.ndarray:
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"eye_like requires a square matrix, got shape {a.shape}")
    return np.eye(a.shape[0], dtype=a.dtype)


@ops.transpose.register
def _(a: np.ndarray) -> np.ndarray:
    return a.T.copy()


@ops.inverse.register
def _(a: np.ndarray) -> np.ndarray:
    if a.ndim == 0:
        return np.asarray(ops.inverse(a.item()))
    try:
        return np.linalg.inv(a)
    except np.linalg.LinAlgError as exc:
        raise ValueError("Matrix is singular.") from exc


@ops.minimum.register
def _(a: np.ndarray, b: Any) -> np.ndarray:
    return np.minimum(a, b)


@ops.maximum.register
def _(a: np.ndarray, b: Any) -> np.ndarray:
    return np.maximum(a, b)


@ops.conj.register
def _(a: np.ndarray) -> np.ndarray:
    return np.conj(a)


@ops.rand_from_range.register
def _(low: np.ndarray, high: Any, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    rng = rng if rng is not None else np.random.default_rng()
    lo = np.minimum(low, high)
    hi = np.maximum(low, high)
    return rng.uniform(lo, hi, size=np.shape(low))


ops.register_constructors(np.ndarray, lambda: np.zeros(0), lambda n: np.eye(n))
