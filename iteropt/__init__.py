"""iteropt - an execution harness for iterative numerical optimization.

Example
-------
>>> import numpy as np
>>> from iteropt import Executor, FunctionObjective, HagerZhangLineSearch, SteepestDescent
>>> objective = FunctionObjective(
...     fun=lambda x: float((x[0] - 3.0) ** 2),
...     grad=lambda x: np.array([2.0 * (x[0] - 3.0)]),
... )
>>> res = (
...     Executor(objective, SteepestDescent(HagerZhangLineSearch()))
...     .configure(lambda state: state.with_param(np.array([0.0])).with_max_iters(50))
...     .run()
... )
>>> round(float(res.state.best_param[0]), 6)
3.0
"""

__version__ = "0.1.0"

from . import math
from .core import (
    KV,
    CallbackObserver,
    Checkpoint,
    CheckpointingFrequency,
    ConfigurationError,
    CostFunction,
    Every,
    ExecutionAbort,
    Executor,
    FileCheckpoint,
    FunctionObjective,
    Gradient,
    Hessian,
    IterOptError,
    IterState,
    Jacobian,
    LoggingObserver,
    NotImplementedCapabilityError,
    NotInitializedError,
    ObjectiveError,
    Observer,
    ObserverMode,
    Operator,
    OptimizationResult,
    PotentialBug,
    Problem,
    Solver,
    TerminationReason,
    approx_grad,
    approx_hessian,
    make_kv,
)
from .logging import configure_logging, get_logger, log_level, set_log_level
from .solver import (
    BacktrackingLineSearch,
    HagerZhangLineSearch,
    LineSearch,
    SteepestDescent,
)

__all__ = [
    "KV",
    "BacktrackingLineSearch",
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
    "HagerZhangLineSearch",
    "Hessian",
    "IterOptError",
    "IterState",
    "Jacobian",
    "LineSearch",
    "LoggingObserver",
    "NotImplementedCapabilityError",
    "NotInitializedError",
    "ObjectiveError",
    "Observer",
    "ObserverMode",
    "Operator",
    "OptimizationResult",
    "PotentialBug",
    "Problem",
    "Solver",
    "SteepestDescent",
    "TerminationReason",
    "__version__",
    "approx_grad",
    "approx_hessian",
    "configure_logging",
    "get_logger",
    "log_level",
    "make_kv",
    "math",
    "set_log_level",
]
