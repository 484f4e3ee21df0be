"""Central finite differences and an objective built from plain callables.

The differences are taken on a flat NumPy copy of the parameter, so ``fun``
must accept NumPy arrays. Results come back in the container type of the
parameter (list, NumPy array or torch tensor).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np
import torch

from .errors import NotImplementedCapabilityError

Objective = Callable[[Any], float]


def _as_flat(x: Any) -> np.ndarray:
    if isinstance(x, torch.Tensor):
        x = x.detach().cpu().numpy()
    return np.asarray(x, dtype=float)


def _restore(values: np.ndarray, like: Any) -> Any:
    if isinstance(like, torch.Tensor):
        dtype = like.dtype if like.is_floating_point() else torch.float64
        return torch.as_tensor(values, dtype=dtype, device=like.device)
    if isinstance(like, list):
        return values.tolist()
    return values


def _unit(x: np.ndarray, i: int, step: float) -> np.ndarray:
    e = np.zeros_like(x)
    e.flat[i] = step
    return e


def approx_grad(fun: Objective, x: Any, eps: float = 1e-6) -> Any:
    """Central-difference gradient of ``fun`` at ``x``.

    Costs ``2 * n`` evaluations of ``fun``.

    Raises:
        ValueError: If ``eps`` is not positive.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x0 = _as_flat(x)
    grad = np.empty_like(x0)
    for i in range(x0.size):
        e = _unit(x0, i, eps)
        grad.flat[i] = (fun(x0 + e) - fun(x0 - e)) / (2.0 * eps)
    return _restore(grad, x)


def approx_hessian(fun: Objective, x: Any, eps: float = 1e-4) -> Any:
    """Central-difference Hessian of ``fun`` at ``x`` (symmetric by construction)."""
    if eps <= 0:
        raise ValueError("eps must be positive")
    x0 = _as_flat(x).ravel()
    n = x0.size
    f0 = fun(x0)
    hess = np.empty((n, n))
    for i in range(n):
        ei = _unit(x0, i, eps)
        hess[i, i] = (fun(x0 + ei) - 2.0 * f0 + fun(x0 - ei)) / eps**2
        for j in range(i):
            ej = _unit(x0, j, eps)
            hess[i, j] = hess[j, i] = (
                fun(x0 + ei + ej) - fun(x0 + ei - ej) - fun(x0 - ei + ej) + fun(x0 - ei - ej)
            ) / (4.0 * eps**2)
    return _restore(hess, x)


@dataclass(frozen=True)
class FunctionObjective:
    """Objective assembled from callables.

    ``grad`` and ``hess`` are optional; when missing they are approximated
    with :func:`approx_grad` and :func:`approx_hessian`. There is no fallback
    for ``jac``.

    Example:
        >>> obj = FunctionObjective(fun=lambda x: float(x[0] ** 2))
        >>> round(float(obj.gradient([1.5])[0]), 6)
        3.0
    """

    fun: Objective
    grad: Optional[Callable[[Any], Any]] = None
    hess: Optional[Callable[[Any], Any]] = None
    jac: Optional[Callable[[Any], Any]] = None
    eps: float = 1e-6

    def cost(self, param: Any) -> float:
        return self.fun(param)

    def gradient(self, param: Any) -> Any:
        if self.grad is None:
            return approx_grad(self.fun, param, eps=self.eps)
        return self.grad(param)

    def hessian(self, param: Any) -> Any:
        if self.hess is None:
            return approx_hessian(self.fun, param)
        return self.hess(param)

    def jacobian(self, param: Any) -> Any:
        if self.jac is None:
            raise NotImplementedCapabilityError("FunctionObjective was built without a Jacobian")
        return self.jac(param)


__all__ = ["FunctionObjective", "approx_grad", "approx_hessian"]
