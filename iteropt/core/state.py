"""Mutable record of the progress of a single optimization run."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

from .termination import TerminationReason

P = TypeVar("P")
G = TypeVar("G")
J = TypeVar("J")
H = TypeVar("H")


@dataclass(eq=False)
class IterState(Generic[P, G, J, H]):
    """State handed between the executor and a solver.

    Solvers receive the state in ``init``/``next_iter``, set new values with
    the fluent ``with_*`` methods and hand it back. The executor then calls
    :meth:`update`, which promotes the current ``(param, cost)`` pair to the
    best pair when it improves on it.

    Parameters are treated as values: a solver must build a new object for
    every new parameter instead of mutating the one stored here.

    Attributes:
        param: Current parameter.
        best_param: Parameter with the lowest cost seen so far.
        cost: Cost of ``param``; ``inf`` until the first evaluation.
        best_cost: Cost of ``best_param``.
        target_cost: The executor stops once ``best_cost`` reaches this.
        grad, hessian, jacobian: Optional derivatives at ``param``.
        iter: Number of completed ``next_iter`` calls.
        last_best_iter: Iteration at which ``best_param`` was last replaced.
        max_iters: Iteration budget.
        counts: Evaluation counters copied from the problem.
        time: Elapsed seconds since the start of the run.
        termination_reason: Why the run stopped, if it did.
    """

    param: Optional[P] = None
    prev_param: Optional[P] = None
    best_param: Optional[P] = None
    prev_best_param: Optional[P] = None
    cost: float = math.inf
    prev_cost: float = math.inf
    best_cost: float = math.inf
    prev_best_cost: float = math.inf
    target_cost: float = -math.inf
    grad: Optional[G] = None
    prev_grad: Optional[G] = None
    hessian: Optional[H] = None
    prev_hessian: Optional[H] = None
    jacobian: Optional[J] = None
    prev_jacobian: Optional[J] = None
    iter: int = 0
    last_best_iter: int = 0
    max_iters: int = 2**63 - 1
    counts: Dict[str, int] = field(default_factory=dict)
    time: Optional[float] = None
    termination_reason: TerminationReason = TerminationReason.NOT_TERMINATED

    # -- fluent setters ------------------------------------------------------

    def with_param(self, param: P) -> "IterState[P, G, J, H]":
        """Set the current parameter; the old one moves to ``prev_param``."""
        self.prev_param = self.param
        self.param = param
        return self

    def with_cost(self, cost: float) -> "IterState[P, G, J, H]":
        """Set the cost of the current parameter."""
        self.prev_cost = self.cost
        self.cost = cost
        return self

    def with_grad(self, grad: G) -> "IterState[P, G, J, H]":
        self.prev_grad = self.grad
        self.grad = grad
        return self

    def with_hessian(self, hessian: H) -> "IterState[P, G, J, H]":
        self.prev_hessian = self.hessian
        self.hessian = hessian
        return self

    def with_jacobian(self, jacobian: J) -> "IterState[P, G, J, H]":
        self.prev_jacobian = self.jacobian
        self.jacobian = jacobian
        return self

    def with_max_iters(self, max_iters: int) -> "IterState[P, G, J, H]":
        if max_iters < 0:
            raise ValueError("max_iters must be non-negative")
        self.max_iters = max_iters
        return self

    def with_target_cost(self, target_cost: float) -> "IterState[P, G, J, H]":
        self.target_cost = target_cost
        return self

    # -- ownership transfer --------------------------------------------------

    def take_param(self) -> Optional[P]:
        """Remove and return the current parameter."""
        param, self.param = self.param, None
        return param

    def take_grad(self) -> Optional[G]:
        """Remove and return the gradient; a second call returns ``None``."""
        grad, self.grad = self.grad, None
        return grad

    def take_hessian(self) -> Optional[H]:
        hessian, self.hessian = self.hessian, None
        return hessian

    def take_jacobian(self) -> Optional[J]:
        jacobian, self.jacobian = self.jacobian, None
        return jacobian

    # -- bookkeeping ---------------------------------------------------------

    def update(self) -> None:
        """Promote ``(param, cost)`` to the best pair if it improves on it.

        The first parameter ever seen becomes the best one regardless of its
        cost. Param and cost are always promoted together.
        """
        if self.param is None:
            return
        if self.best_param is None or self.cost < self.best_cost:
            self.prev_best_param = self.best_param
            self.prev_best_cost = self.best_cost
            self.best_param = self.param
            self.best_cost = self.cost
            self.last_best_iter = self.iter

    def is_best(self) -> bool:
        """True if the last :meth:`update` produced a new best parameter."""
        return self.last_best_iter == self.iter

    def increment_iter(self) -> None:
        self.iter += 1

    def func_counts(self, problem: Any) -> None:
        """Copy the evaluation counters of ``problem``."""
        self.counts = dict(problem.counts)

    def terminate_with(self, reason: TerminationReason) -> "IterState[P, G, J, H]":
        """Record ``reason``; an existing terminal reason is never replaced."""
        if not self.termination_reason.terminated():
            self.termination_reason = reason
        return self

    def terminated(self) -> bool:
        return self.termination_reason.terminated()


__all__ = ["IterState"]
