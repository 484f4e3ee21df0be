"""Backtracking line search enforcing the Armijo sufficient decrease condition."""

from __future__ import annotations

import math
from typing import Any, Optional, Tuple

from ... import math as im
from ...core.errors import ConfigurationError, NotInitializedError
from ...core.kv import KV, make_kv
from ...core.problem import Problem
from ...core.state import IterState
from ...core.termination import TerminationReason
from .base import LineSearch


class BacktrackingLineSearch(LineSearch):
    """Classic Armijo backtracking: shrink ``alpha`` by ``rho`` until
    ``phi(alpha) <= phi(0) + c * alpha * phi'(0)``.
    """

    name = "Backtracking line search"

    def __init__(self, rho: float = 0.5, c: float = 1e-4) -> None:
        if not (0 < c < 1):
            raise ConfigurationError("BacktrackingLineSearch: c must lie in (0, 1).")
        if not (0 < rho < 1):
            raise ConfigurationError("BacktrackingLineSearch: rho must lie in (0, 1).")
        self.rho = float(rho)
        self.c = float(c)
        self.init_alpha = 1.0
        self.search_direction: Optional[Any] = None
        self.init_param: Optional[Any] = None
        self.finit = math.inf
        self.dginit = math.nan
        self.alpha = math.nan
        self.f_alpha = math.inf

    def _probe(self, problem: Problem[Any], state: IterState) -> IterState:
        param = im.scaled_add(self.init_param, self.alpha, self.search_direction)
        self.f_alpha = float(problem.cost(param))
        return state.with_param(param).with_cost(self.f_alpha)

    def init(self, problem: Problem[Any], state: IterState) -> Tuple[IterState, Optional[KV]]:
        if self.search_direction is None:
            raise NotInitializedError(
                "BacktrackingLineSearch: Search direction not initialized. "
                "Call `set_search_direction`."
            )
        if state.param is None:
            raise NotInitializedError("BacktrackingLineSearch: Initial parameter vector required.")

        self.init_param = state.param
        self.finit = float(problem.cost(self.init_param)) if math.isinf(state.cost) else float(state.cost)
        grad = state.take_grad()
        if grad is None:
            grad = problem.gradient(self.init_param)
        self.dginit = float(im.dot(grad, self.search_direction))
        if self.dginit >= 0:
            raise ValueError("Search direction must be a descent direction.")

        self.alpha = self.init_alpha
        return self._probe(problem, state), None

    def next_iter(self, problem: Problem[Any], state: IterState) -> Tuple[IterState, Optional[KV]]:
        self.alpha *= self.rho
        return self._probe(problem, state), make_kv(alpha=self.alpha)

    def terminate(self, state: IterState) -> TerminationReason:
        if self.f_alpha <= self.finit + self.c * self.alpha * self.dginit:
            return TerminationReason.LINE_SEARCH_CONDITION_MET
        return TerminationReason.NOT_TERMINATED


__all__ = ["BacktrackingLineSearch"]
