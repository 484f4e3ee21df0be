"""Result object returned by :meth:`Executor.run`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .problem import Problem
from .solver import Solver
from .state import IterState
from .termination import TerminationReason


@dataclass
class OptimizationResult:
    """Outcome of a run: the final state, the solver and the problem.

    Attributes:
        problem: The problem wrapper, holding the evaluation counters.
        solver: The solver in its final configuration.
        state: The final iteration state.
    """

    problem: Problem[Any]
    solver: Solver
    state: IterState

    @property
    def solver_name(self) -> str:
        return self.solver.name

    @property
    def best_param(self) -> Optional[Any]:
        return self.state.best_param

    @property
    def best_cost(self) -> float:
        return self.state.best_cost

    @property
    def termination_reason(self) -> TerminationReason:
        return self.state.termination_reason

    @property
    def counts(self) -> Dict[str, int]:
        return dict(self.problem.counts)

    def __str__(self) -> str:
        state = self.state
        lines = [
            "OptimizationResult:",
            f"    Solver:        {self.solver_name}",
            f"    param (best):  {state.best_param}",
            f"    cost (best):   {state.best_cost}",
            f"    iters (best):  {state.last_best_iter}",
            f"    iters (total): {state.iter}",
            f"    termination:   {state.termination_reason.text()}",
        ]
        if state.time is not None:
            lines.append(f"    time:          {state.time:.6f}s")
        return "\n".join(lines)


__all__ = ["OptimizationResult"]
