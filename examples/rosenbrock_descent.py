"""Steepest descent on the Rosenbrock function.

The first run works on NumPy arrays with an analytic gradient and prints one
line per iteration through ``LoggingObserver``. The second run uses PyTorch
tensors and obtains the gradient from autograd, then prints the step lengths
chosen by a single Hager-Zhang line search.
"""

from __future__ import annotations

import logging

import numpy as np
import torch

from iteropt import (
    CallbackObserver,
    Executor,
    FunctionObjective,
    HagerZhangLineSearch,
    LoggingObserver,
    ObserverMode,
    SteepestDescent,
    configure_logging,
)


def rosen(x: np.ndarray) -> float:
    return float((1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2)


def rosen_grad(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
            200 * (x[1] - x[0] ** 2),
        ]
    )


class TorchRosenbrock:
    """Rosenbrock function on tensors with the gradient taken from autograd."""

    def cost(self, x: torch.Tensor) -> float:
        return float((1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2)

    def gradient(self, x: torch.Tensor) -> torch.Tensor:
        x = x.detach().clone().requires_grad_(True)
        value = (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2
        (grad,) = torch.autograd.grad(value, x)
        return grad


def numpy_run() -> None:
    print("=" * 60)
    print("Steepest descent with Hager-Zhang, NumPy parameters")
    print("=" * 60)
    configure_logging(level=logging.INFO)
    result = (
        Executor(
            FunctionObjective(fun=rosen, grad=rosen_grad),
            SteepestDescent(HagerZhangLineSearch()),
        )
        .configure(lambda state: state.with_param(np.array([-1.2, 1.0])).with_max_iters(25))
        .add_observer(LoggingObserver(), ObserverMode.every(5))
        .run()
    )
    configure_logging(level=logging.WARNING)
    print(result)
    print(f"Evaluations: {result.counts}")


def torch_line_search() -> None:
    print("=" * 60)
    print("Single Hager-Zhang line search, torch parameters")
    print("=" * 60)
    objective = TorchRosenbrock()
    x0 = torch.tensor([-1.2, 1.0], dtype=torch.float64)
    solver = HagerZhangLineSearch()
    solver.set_search_direction(-objective.gradient(x0))

    steps = []
    result = (
        Executor(objective, solver)
        .configure(lambda state: state.with_param(x0).with_max_iters(50))
        .add_observer(CallbackObserver(lambda state, kv: steps.append(kv.get("alpha"))))
        .run()
    )
    for i, alpha in enumerate(steps, start=1):
        print(f"Iteration {i:02d}: Hager-Zhang step = {alpha:.6e}")
    print(f"Termination: {result.termination_reason}")
    print(f"Cost: {objective.cost(x0):.6f} -> {result.best_cost:.6f}")


def main() -> None:
    numpy_run()
    torch_line_search()


if __name__ == "__main__":
    main()
