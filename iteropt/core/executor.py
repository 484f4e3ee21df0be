"""Executor driving a solver over a problem until a stopping criterion fires."""

from __future__ import annotations

import copy
import time
from typing import Any, Callable, Optional

from ..logging import get_logger
from .checkpointing import Checkpoint
from .kv import KV
from .observers import Mode, Observer, ObserverMode, Observers
from .problem import Problem
from .result import OptimizationResult
from .solver import Solver
from .state import IterState
from .termination import TerminationReason

logger = get_logger(__name__)


class Executor:
    """Runs a :class:`~iteropt.core.solver.Solver` on a problem.

    The executor owns the problem wrapper and the iteration state for the
    duration of :meth:`run`. Besides the solver's own ``terminate`` it applies
    the stopping policies every solver shares: iteration budget, target cost
    and wall-clock timeout. The solver's verdict takes precedence over the
    policies, which are checked in that order.

    Observers and the checkpoint store receive deep copies of the state and
    the solver, never the objects the run keeps mutating. A
    ``KeyboardInterrupt`` raised while the solver computes an iteration ends
    the run with :attr:`TerminationReason.ABORTED` and the best point found so
    far. Other errors raised by the solver, an observer or the checkpoint
    store are not caught; they end the run and reach the caller unchanged.

    Example:
        >>> res = (
        ...     Executor(objective, solver)
        ...     .configure(lambda state: state.with_param(x0).with_max_iters(100))
        ...     .add_observer(LoggingObserver(), ObserverMode.ALWAYS)
        ...     .run()
        ... )  # doctest: +SKIP

    Args:
        problem: A user objective or an existing :class:`Problem`.
        solver: The solver to run.
    """

    def __init__(self, problem: Any, solver: Solver) -> None:
        self.problem: Problem[Any] = problem if isinstance(problem, Problem) else Problem(problem)
        self.solver = solver
        self.state: IterState = IterState()
        self.observers = Observers()
        self.checkpoint: Optional[Checkpoint] = None
        self.timeout_seconds: Optional[float] = None

    # -- configuration -------------------------------------------------------

    def configure(self, init: Callable[[IterState], IterState]) -> "Executor":
        """Apply ``init`` to the initial state (set param, max_iters, ...)."""
        self.state = init(self.state)
        return self

    def add_observer(self, observer: Observer, mode: Mode = ObserverMode.ALWAYS) -> "Executor":
        self.observers.push(observer, mode)
        return self

    def checkpointing(self, checkpoint: Checkpoint) -> "Executor":
        """Save checkpoints with ``checkpoint`` and resume from it if present."""
        self.checkpoint = checkpoint
        return self

    def timeout(self, seconds: float) -> "Executor":
        """Stop once the elapsed time reaches ``seconds``."""
        if seconds <= 0:
            raise ValueError("timeout must be positive")
        self.timeout_seconds = float(seconds)
        return self

    # -- run -----------------------------------------------------------------

    def _verdict(self, state: IterState) -> TerminationReason:
        reason = self.solver.terminate(state)
        if reason.terminated():
            return reason
        if state.iter >= state.max_iters:
            return TerminationReason.MAX_ITERS_REACHED
        if state.best_cost <= state.target_cost:
            return TerminationReason.TARGET_COST_REACHED
        if self.timeout_seconds is not None and (state.time or 0.0) >= self.timeout_seconds:
            return TerminationReason.TIMEOUT
        return TerminationReason.NOT_TERMINATED

    def _metrics(self, state: IterState, kv: Optional[KV]) -> KV:
        record = KV().merge(kv).push("iter", state.iter).push("time", state.time)
        for key, value in state.counts.items():
            record.push(key, value)
        return record

    def run(self) -> OptimizationResult:
        """Run the solver to completion and return the result."""
        state = self.state
        resumed = False
        if self.checkpoint is not None:
            loaded = self.checkpoint.load()
            if loaded is not None:
                self.solver, state = loaded
                self.problem.counts.update(state.counts)
                resumed = True

        time_offset = state.time or 0.0
        start = time.perf_counter()

        def elapsed() -> float:
            return time_offset + time.perf_counter() - start

        logger.info("Running %s", self.solver.name)

        if not resumed:
            state, kv = self.solver.init(self.problem, state)
            state.func_counts(self.problem)
            state.update()
            state.time = elapsed()
            self.observers.observe_init(self.solver.name, KV().merge(kv))
            state.terminate_with(self._verdict(state))

        while not state.terminated():
            try:
                state, kv = self.solver.next_iter(self.problem, state)
            except KeyboardInterrupt:
                logger.warning("%s interrupted during iteration %d", self.solver.name, state.iter + 1)
                state.func_counts(self.problem)
                state.time = elapsed()
                state.terminate_with(TerminationReason.ABORTED)
                break
            state.func_counts(self.problem)
            state.increment_iter()
            state.update()
            state.time = elapsed()
            state.terminate_with(self._verdict(state))

            record = self._metrics(state, kv)
            logger.debug("%s | %s", self.solver.name, record)

            save = self.checkpoint is not None and self.checkpoint.frequency.is_due(state.iter)
            snapshot = copy.deepcopy(state) if save or self.observers.due(state) else None
            self.observers.observe_iter(state, record, snapshot)
            if save:
                self.checkpoint.save(copy.deepcopy(self.solver), snapshot)

        logger.info(
            "%s finished after %d iterations: %s (best cost %s)",
            self.solver.name,
            state.iter,
            state.termination_reason.text(),
            state.best_cost,
        )
        self.state = state
        return OptimizationResult(problem=self.problem, solver=self.solver, state=state)


__all__ = ["Executor"]
