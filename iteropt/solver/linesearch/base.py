"""Common interface of line search solvers."""

from __future__ import annotations

from typing import Any, Optional

from ...core.errors import ConfigurationError
from ...core.solver import Solver


class LineSearch(Solver):
    """A solver looking for a step length along a fixed search direction.

    The caller sets the direction with :meth:`set_search_direction` before the
    run; the parameter in the initial state is the starting point.
    """

    search_direction: Optional[Any] = None
    init_alpha: float = 1.0

    def set_search_direction(self, direction: Any) -> None:
        self.search_direction = direction

    def set_init_alpha(self, alpha: float) -> None:
        """Set the first step length tried."""
        if alpha <= 0:
            raise ConfigurationError(f"{type(self).__name__}: initial alpha must be > 0.0.")
        self.init_alpha = float(alpha)


__all__ = ["LineSearch"]
