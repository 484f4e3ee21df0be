"""Steepest descent with a pluggable line search."""

from __future__ import annotations

import math
from typing import Any, Optional, Tuple

from ... import math as im
from ...core.errors import ConfigurationError, NotInitializedError
from ...core.executor import Executor
from ...core.kv import KV, make_kv
from ...core.problem import Problem
from ...core.solver import Solver
from ...core.state import IterState
from ...core.termination import TerminationReason
from ..linesearch.base import LineSearch


class SteepestDescent(Solver):
    """Moves along the negative gradient with a step chosen by ``linesearch``.

    Each iteration runs the line search to completion in a nested
    :class:`~iteropt.core.executor.Executor`; its evaluations are added to the
    counters of the outer problem.

    Args:
        linesearch: Line search solver used for the step length.
        tol_grad: Stop with ``SOLVER_CONVERGED`` once the gradient norm is at
            most this value.
        max_linesearch_iters: Iteration budget of each line search run.
    """

    name = "Steepest Descent"

    def __init__(
        self,
        linesearch: LineSearch,
        tol_grad: float = 1e-8,
        max_linesearch_iters: int = 100,
    ) -> None:
        if tol_grad < 0:
            raise ConfigurationError("SteepestDescent: tol_grad must be >= 0.0.")
        if max_linesearch_iters < 1:
            raise ConfigurationError("SteepestDescent: max_linesearch_iters must be >= 1.")
        self.linesearch = linesearch
        self.tol_grad = float(tol_grad)
        self.max_linesearch_iters = int(max_linesearch_iters)

    def init(self, problem: Problem[Any], state: IterState) -> Tuple[IterState, Optional[KV]]:
        if state.param is None:
            raise NotInitializedError(
                "SteepestDescent: Initial parameter vector required. "
                "Set it with `state.with_param`."
            )
        if math.isinf(state.cost):
            state.with_cost(problem.cost(state.param))
        if state.grad is None:
            state.with_grad(problem.gradient(state.param))
        return state, None

    def next_iter(self, problem: Problem[Any], state: IterState) -> Tuple[IterState, Optional[KV]]:
        param = state.param
        cost = state.cost
        grad = state.take_grad()
        if grad is None:
            grad = problem.gradient(param)

        self.linesearch.set_search_direction(im.mul(grad, -1.0))
        ls_result = (
            Executor(Problem(problem.problem), self.linesearch)
            .configure(
                lambda s: s.with_param(param)
                .with_cost(cost)
                .with_grad(grad)
                .with_max_iters(self.max_linesearch_iters)
            )
            .run()
        )
        problem.consume_counts(ls_result.problem)
        if ls_result.termination_reason is TerminationReason.ABORTED:
            raise KeyboardInterrupt

        ls_state = ls_result.state
        new_param = ls_state.param
        new_grad = problem.gradient(new_param)
        kv = make_kv(
            linesearch_iters=ls_state.iter,
            linesearch=ls_state.termination_reason.text(),
            grad_norm=im.norm(new_grad),
        )
        return state.with_param(new_param).with_cost(ls_state.cost).with_grad(new_grad), kv

    def terminate(self, state: IterState) -> TerminationReason:
        if state.grad is not None and im.norm(state.grad) <= self.tol_grad:
            return TerminationReason.SOLVER_CONVERGED
        return TerminationReason.NOT_TERMINATED


__all__ = ["SteepestDescent"]
