"""Exception hierarchy shared by the executor, problems and solvers."""

from __future__ import annotations


class IterOptError(Exception):
    """Base class for all errors raised by iteropt."""


class ConfigurationError(IterOptError, ValueError):
    """A tuning parameter was set outside its admissible range."""


class ObjectiveError(IterOptError, RuntimeError):
    """A user-supplied cost, gradient, Hessian, Jacobian or operator failed."""


class NotImplementedCapabilityError(ObjectiveError, NotImplementedError):
    """The objective does not provide a capability the solver asked for."""


class NotInitializedError(IterOptError, RuntimeError):
    """A required input (search direction, initial parameter, ...) is missing."""


class PotentialBug(IterOptError, AssertionError):
    """An internal invariant of an algorithm was violated."""


class ExecutionAbort(IterOptError, RuntimeError):
    """An observer or checkpoint store failed and the run was aborted."""


__all__ = [
    "ConfigurationError",
    "ExecutionAbort",
    "IterOptError",
    "NotImplementedCapabilityError",
    "NotInitializedError",
    "ObjectiveError",
    "PotentialBug",
]
