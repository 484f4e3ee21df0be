"""Abstract base class for all solvers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from .kv import KV
from .problem import Problem
from .state import IterState
from .termination import TerminationReason

SolverOutput = Tuple[IterState, Optional[KV]]


class Solver(ABC):
    """Strategy driven by :class:`~iteropt.core.executor.Executor`.

    Lifecycle: the executor calls :meth:`init` exactly once, then
    :meth:`next_iter` until :meth:`terminate` (or one of the executor's own
    stopping policies) reports a terminal reason. An exception raised from
    ``init`` or ``next_iter`` ends the run.
    """

    #: Human readable solver name, reported in results and logs.
    name: str = "Solver"

    def init(self, problem: Problem[Any], state: IterState) -> SolverOutput:
        """Prepare the solver; may already mark the state as terminated."""
        return state, None

    @abstractmethod
    def next_iter(self, problem: Problem[Any], state: IterState) -> SolverOutput:
        """Perform one iteration and return the updated state."""
        raise NotImplementedError

    def terminate(self, state: IterState) -> TerminationReason:
        """Solver specific stopping criterion. Must not mutate anything."""
        return TerminationReason.NOT_TERMINATED


__all__ = ["Solver", "SolverOutput"]
