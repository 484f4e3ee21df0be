"""PyTorch backend.

Scalar results (dot of two vectors, norms) are returned as Python numbers so
solvers can compare them with plain floats.
"""

from __future__ import annotations

from typing import Any, Optional

import torch

from . import ops


@ops.dot.register
def _(a: torch.Tensor, b: Any) -> Any:
    if not isinstance(b, torch.Tensor):
        return a * b
    result = torch.matmul(a, b)
    if result.ndim == 0:
        return result.item()
    return result


@ops.add.register
def _(a: torch.Tensor, b: Any) -> torch.Tensor:
    return a + b


@ops.sub.register
def _(a: torch.Tensor, b: Any) -> torch.Tensor:
    return a - b


@ops.mul.register
def _(a: torch.Tensor, b: Any) -> torch.Tensor:
    return a * b


@ops.div.register
def _(a: torch.Tensor, b: Any) -> torch.Tensor:
    return a / b


@ops.scaled_add.register
def _(a: torch.Tensor, factor: Any, b: torch.Tensor) -> torch.Tensor:
    return a + factor * b


@ops.scaled_sub.register
def _(a: torch.Tensor, factor: Any, b: torch.Tensor) -> torch.Tensor:
    return a - factor * b


@ops.norm.register
def _(a: torch.Tensor) -> float:
    return torch.linalg.vector_norm(a).item()


@ops.zero_like.register
def _(a: torch.Tensor) -> torch.Tensor:
    return torch.zeros_like(a)


@ops.eye_like.register
def _(a: torch.Tensor) -> torch.Tensor:
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"eye_like requires a square matrix, got shape {tuple(a.shape)}")
    return torch.eye(a.shape[0], dtype=a.dtype, device=a.device)


@ops.transpose.register
def _(a: torch.Tensor) -> torch.Tensor:
    if a.ndim < 2:
        return a.clone()
    return a.transpose(-2, -1).clone()


@ops.inverse.register
def _(a: torch.Tensor) -> torch.Tensor:
    try:
        return torch.linalg.inv(a)
    except RuntimeError as exc:
        # torch.linalg.LinAlgError derives from RuntimeError
        raise ValueError("Matrix is singular.") from exc


@ops.minimum.register
def _(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return torch.minimum(a, b)


@ops.maximum.register
def _(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return torch.maximum(a, b)


@ops.conj.register
def _(a: torch.Tensor) -> torch.Tensor:
    return torch.conj(a).resolve_conj()


@ops.rand_from_range.register
def _(
    low: torch.Tensor, high: torch.Tensor, rng: Optional[torch.Generator] = None
) -> torch.Tensor:
    lo = torch.minimum(low, high)
    hi = torch.maximum(low, high)
    u = torch.rand(low.shape, generator=rng, dtype=low.dtype, device=low.device)
    return lo + u * (hi - lo)


ops.register_constructors(
    torch.Tensor,
    lambda: torch.zeros(0, dtype=torch.float64),
    lambda n: torch.eye(n, dtype=torch.float64),
)
