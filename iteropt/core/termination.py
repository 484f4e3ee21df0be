"""Reasons why an optimization run stopped."""

from __future__ import annotations

from enum import Enum


class TerminationReason(Enum):
    """Why a run stopped. Every member except ``NOT_TERMINATED`` is terminal."""

    NOT_TERMINATED = "not_terminated"
    MAX_ITERS_REACHED = "max_iters_reached"
    TARGET_COST_REACHED = "target_cost_reached"
    TARGET_PRECISION_REACHED = "target_precision_reached"
    COST_NOT_CHANGING = "cost_not_changing"
    PARAM_NOT_CHANGING = "param_not_changing"
    LINE_SEARCH_CONDITION_MET = "line_search_condition_met"
    SOLVER_CONVERGED = "solver_converged"
    TIMEOUT = "timeout"
    ABORTED = "aborted"
    SOLVER_EXIT = "solver_exit"

    def terminated(self) -> bool:
        """Return True for every reason except ``NOT_TERMINATED``."""
        return self is not TerminationReason.NOT_TERMINATED

    def text(self) -> str:
        """Human readable description."""
        return _TEXT[self]

    def __str__(self) -> str:
        return self.text()


_TEXT = {
    TerminationReason.NOT_TERMINATED: "Not terminated",
    TerminationReason.MAX_ITERS_REACHED: "Maximum number of iterations reached",
    TerminationReason.TARGET_COST_REACHED: "Target cost value reached",
    TerminationReason.TARGET_PRECISION_REACHED: "Target precision reached",
    TerminationReason.COST_NOT_CHANGING: "Cost function value did not change",
    TerminationReason.PARAM_NOT_CHANGING: "Parameter vector did not change",
    TerminationReason.LINE_SEARCH_CONDITION_MET: "Line search condition met",
    TerminationReason.SOLVER_CONVERGED: "Solver converged",
    TerminationReason.TIMEOUT: "Timeout reached",
    TerminationReason.ABORTED: "Optimization aborted",
    TerminationReason.SOLVER_EXIT: "Solver exit",
}


__all__ = ["TerminationReason"]
