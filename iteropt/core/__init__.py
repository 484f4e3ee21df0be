"""Execution engine shared by every solver.

The pieces are the :class:`Problem` wrapper counting objective evaluations,
the :class:`IterState` record, the :class:`Solver` base class and the
:class:`Executor` running the loop, plus observers and checkpoints.
"""

from .checkpointing import Checkpoint, CheckpointingFrequency, FileCheckpoint
from .errors import (
    ConfigurationError,
    ExecutionAbort,
    IterOptError,
    NotImplementedCapabilityError,
    NotInitializedError,
    ObjectiveError,
    PotentialBug,
)
from .executor import Executor
from .finitediff import FunctionObjective, approx_grad, approx_hessian
from .kv import KV, make_kv
from .observers import CallbackObserver, Every, LoggingObserver, Observer, ObserverMode, Observers
from .problem import CostFunction, Gradient, Hessian, Jacobian, Operator, Problem
from .result import OptimizationResult
from .solver import Solver, SolverOutput
from .state import IterState
from .termination import TerminationReason

__all__ = [
    "CallbackObserver",
    "Checkpoint",
    "CheckpointingFrequency",
    "ConfigurationError",
    "CostFunction",
    "Every",
    "ExecutionAbort",
    "Executor",
    "FileCheckpoint",
    "FunctionObjective",
    "Gradient",
    "Hessian",
    "IterOptError",
    "IterState",
    "Jacobian",
    "KV",
    "LoggingObserver",
    "NotImplementedCapabilityError",
    "NotInitializedError",
    "ObjectiveError",
    "Observer",
    "ObserverMode",
    "Observers",
    "Operator",
    "OptimizationResult",
    "PotentialBug",
    "Problem",
    "Solver",
    "SolverOutput",
    "TerminationReason",
    "approx_grad",
    "approx_hessian",
    "make_kv",
]
