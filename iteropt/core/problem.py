"""Objective capability protocols and the counting :class:`Problem` wrapper."""

from __future__ import annotations

from typing import Any, Dict, Generic, Protocol, TypeVar, runtime_checkable

from .errors import NotImplementedCapabilityError, ObjectiveError


@runtime_checkable
class CostFunction(Protocol):
    """Objective exposing ``cost(param) -> float``."""

    def cost(self, param: Any) -> float:
        ...


@runtime_checkable
class Gradient(Protocol):
    """Objective exposing ``gradient(param) -> gradient``."""

    def gradient(self, param: Any) -> Any:
        ...


@runtime_checkable
class Hessian(Protocol):
    """Objective exposing ``hessian(param) -> hessian``."""

    def hessian(self, param: Any) -> Any:
        ...


@runtime_checkable
class Jacobian(Protocol):
    """Objective exposing ``jacobian(param) -> jacobian``."""

    def jacobian(self, param: Any) -> Any:
        ...


@runtime_checkable
class Operator(Protocol):
    """Objective exposing ``apply(param) -> output``."""

    def apply(self, param: Any) -> Any:
        ...


O = TypeVar("O")

_CAPABILITIES = {
    "cost": "cost_count",
    "gradient": "gradient_count",
    "hessian": "hessian_count",
    "jacobian": "jacobian_count",
    "apply": "operator_count",
}


class Problem(Generic[O]):
    """Wraps a user objective and counts every evaluation.

    Nothing is cached: each call re-evaluates the objective. A callback that
    raises :class:`ObjectiveError` propagates unchanged; any other exception
    is re-raised as :class:`ObjectiveError` chained to the original.

    Args:
        problem: Object implementing any subset of :class:`CostFunction`,
            :class:`Gradient`, :class:`Hessian`, :class:`Jacobian` and
            :class:`Operator`.
    """

    def __init__(self, problem: O) -> None:
        self.problem = problem
        self.counts: Dict[str, int] = {counter: 0 for counter in _CAPABILITIES.values()}

    def _call(self, capability: str, param: Any) -> Any:
        func = getattr(self.problem, capability, None)
        if func is None or not callable(func):
            raise NotImplementedCapabilityError(
                f"{type(self.problem).__name__} does not implement '{capability}'."
            )
        self.counts[_CAPABILITIES[capability]] += 1
        try:
            return func(param)
        except NotImplementedCapabilityError:
            self.counts[_CAPABILITIES[capability]] -= 1
            raise
        except ObjectiveError:
            raise
        except Exception as exc:
            raise ObjectiveError(
                f"{type(self.problem).__name__}.{capability} failed: {exc}"
            ) from exc

    def cost(self, param: Any) -> Any:
        """Evaluate the cost function at ``param``."""
        return self._call("cost", param)

    def gradient(self, param: Any) -> Any:
        """Evaluate the gradient at ``param``."""
        return self._call("gradient", param)

    def hessian(self, param: Any) -> Any:
        """Evaluate the Hessian at ``param``."""
        return self._call("hessian", param)

    def jacobian(self, param: Any) -> Any:
        """Evaluate the Jacobian at ``param``."""
        return self._call("jacobian", param)

    def apply(self, param: Any) -> Any:
        """Apply the operator to ``param``."""
        return self._call("apply", param)

    def consume_counts(self, other: "Problem[Any]") -> None:
        """Add the counters of ``other`` (e.g. a nested run) to this problem."""
        for key, value in other.counts.items():
            self.counts[key] = self.counts.get(key, 0) + value

    def __repr__(self) -> str:
        return f"Problem({type(self.problem).__name__}, counts={self.counts})"


__all__ = [
    "CostFunction",
    "Gradient",
    "Hessian",
    "Jacobian",
    "Operator",
    "Problem",
]
