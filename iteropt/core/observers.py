"""Observers are notified with a snapshot of the state after every iteration."""

from __future__ import annotations

import copy
import logging
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from ..logging import get_logger
from .kv import KV
from .state import IterState


class ObserverMode(Enum):
    """When an observer is called.

    Use :meth:`every` for observing every ``n``-th iteration.
    """

    NEVER = "never"
    ALWAYS = "always"
    NEW_BEST = "new_best"

    @classmethod
    def every(cls, n: int) -> "Every":
        """Observe every ``n``-th iteration."""
        return Every(n)

    def should_observe(self, state: IterState) -> bool:
        if self is ObserverMode.ALWAYS:
            return True
        if self is ObserverMode.NEW_BEST:
            return state.is_best()
        return False


@dataclass(frozen=True)
class Every:
    """Observer mode that fires when the iteration number is a multiple of ``n``."""

    n: int

    def __post_init__(self) -> None:
        if self.n < 1:
            raise ValueError("n must be >= 1")

    def should_observe(self, state: IterState) -> bool:
        return state.iter % self.n == 0


Mode = Union[ObserverMode, Every]


class Observer(ABC):
    """Base class for observers. Both hooks default to doing nothing.

    An exception raised from a hook aborts the run; implementations should
    raise :class:`~iteropt.core.errors.ExecutionAbort` for their own failures.
    """

    def observe_init(self, name: str, kv: KV) -> None:
        """Called once after the solver was initialized."""

    def observe_iter(self, state: IterState, kv: KV) -> None:
        """Called after an iteration with a snapshot of the state."""


class CallbackObserver(Observer):
    """Adapts a plain ``callback(state, kv)`` function to :class:`Observer`."""

    def __init__(self, callback: Callable[[IterState, KV], None]) -> None:
        self.callback = callback

    def observe_iter(self, state: IterState, kv: KV) -> None:
        self.callback(state, kv)


class LoggingObserver(Observer):
    """Writes one log record per observed iteration."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self.logger = logger or get_logger(__name__)
        self.level = level

    def observe_init(self, name: str, kv: KV) -> None:
        message = f"{name}"
        if len(kv):
            message += f" | {kv}"
        self.logger.log(self.level, message)

    def observe_iter(self, state: IterState, kv: KV) -> None:
        self.logger.log(
            self.level,
            "iter: %d, best_cost: %s, cost: %s | %s",
            state.iter,
            state.best_cost,
            state.cost,
            kv,
        )


class Observers:
    """Ordered collection of ``(observer, mode)`` pairs."""

    def __init__(self) -> None:
        self.observers: List[Tuple[Observer, Mode]] = []

    def push(self, observer: Observer, mode: Mode) -> "Observers":
        self.observers.append((observer, mode))
        return self

    def is_empty(self) -> bool:
        return not self.observers

    def observe_init(self, name: str, kv: KV) -> None:
        for observer, mode in self.observers:
            if mode is not ObserverMode.NEVER:
                observer.observe_init(name, kv)

    def due(self, state: IterState) -> List[Observer]:
        """Observers whose mode fires for ``state``."""
        return [obs for obs, mode in self.observers if mode.should_observe(state)]

    def observe_iter(self, state: IterState, kv: KV, snapshot: Optional[IterState] = None) -> None:
        """Notify every due observer with a deep copy of ``state``.

        ``snapshot`` is used instead of a fresh copy when the caller already
        took one.
        """
        due = self.due(state)
        if not due:
            return
        if snapshot is None:
            snapshot = copy.deepcopy(state)
        for observer in due:
            observer.observe_iter(snapshot, kv)


__all__ = [
    "CallbackObserver",
    "Every",
    "LoggingObserver",
    "Observer",
    "ObserverMode",
    "Observers",
]
