"""Hager-Zhang line search.

Finds a step length satisfying the Wolfe or the approximate Wolfe conditions
using a bracketing interval ``[a, b]`` that keeps the opposite slope condition
``phi'(a) < 0 <= phi'(b)`` and shrinks it with double secant steps.

References:
    - W. W. Hager and H. Zhang, "A new conjugate gradient method with
      guaranteed descent and an efficient line search", SIAM J. Optim.
      16(1), 2006, 170-192. DOI: 10.1137/030601880
"""

from __future__ import annotations

import math
import sys
from typing import Any, Optional, Tuple

from ... import math as im
from ...core.errors import ConfigurationError, NotInitializedError, PotentialBug
from ...core.kv import KV, make_kv
from ...core.problem import Problem
from ...core.state import IterState
from ...core.termination import TerminationReason
from ...logging import get_logger
from .base import LineSearch

logger = get_logger(__name__)

EPS = sys.float_info.epsilon

#: ``(step length, phi(step), phi'(step))``
Triplet = Tuple[float, float, float]

_NAN_TRIPLET: Triplet = (math.nan, math.nan, math.nan)


class HagerZhangLineSearch(LineSearch):
    """Hager-Zhang line search solver.

    Every tuning parameter is validated when set and a violation raises
    :class:`~iteropt.core.errors.ConfigurationError` naming the bound.

    Args:
        delta: Sufficient decrease parameter, ``0 < delta < 1``.
        sigma: Curvature parameter, ``delta <= sigma < 1``.
        epsilon: Relative tolerance of the approximate Wolfe conditions,
            ``epsilon >= 0``.
        theta: Bisection weight used by the update rule, ``0 < theta < 1``.
        gamma: A bisection step is forced when an iteration shrinks the
            bracket by less than this factor, ``0 < gamma < 1``.
        eta: Lower bound parameter for conjugate gradient updates,
            ``eta > 0``.
        alpha_min: Left end of the initial bracket, ``alpha_min >= 0``.
        alpha_max: Right end of the initial bracket, ``alpha_max > alpha_min``.
        max_bisection_iters: Cap on the inner bisection of the update rule.
            Exhausting it raises :class:`~iteropt.core.errors.PotentialBug`.
    """

    name = "Hager-Zhang line search"

    def __init__(
        self,
        delta: float = 0.1,
        sigma: float = 0.9,
        epsilon: float = 1e-6,
        theta: float = 0.5,
        gamma: float = 0.66,
        eta: float = 0.01,
        alpha_min: float = EPS,
        alpha_max: float = 100.0,
        max_bisection_iters: int = 100,
    ) -> None:
        self.delta = 0.1
        self.sigma = 0.9
        self.with_delta(delta)
        self.with_sigma(sigma)
        self.with_epsilon(epsilon)
        self.with_theta(theta)
        self.with_gamma(gamma)
        self.with_eta(eta)
        self.with_alpha(alpha_min, alpha_max)
        self.with_max_bisection_iters(max_bisection_iters)

        self.init_alpha = 1.0
        self.search_direction: Optional[Any] = None
        self.init_param: Optional[Any] = None
        self.init_grad: Optional[Any] = None
        self.finit = math.inf
        self.dginit = math.nan
        self.epsilon_k = math.nan
        self.a: Triplet = _NAN_TRIPLET
        self.b: Triplet = _NAN_TRIPLET
        self.c: Triplet = _NAN_TRIPLET
        self.best: Triplet = (0.0, math.inf, math.nan)

    # -- configuration -------------------------------------------------------

    def _fail(self, message: str) -> ConfigurationError:
        return ConfigurationError(f"HagerZhangLineSearch: {message}")

    def with_delta(self, delta: float) -> "HagerZhangLineSearch":
        if delta <= 0.0:
            raise self._fail("delta must be > 0.0.")
        if delta >= 1.0:
            raise self._fail("delta must be < 1.0.")
        self.delta = float(delta)
        return self

    def with_sigma(self, sigma: float) -> "HagerZhangLineSearch":
        if sigma < self.delta:
            raise self._fail("sigma must be >= delta.")
        if sigma >= 1.0:
            raise self._fail("sigma must be < 1.0.")
        self.sigma = float(sigma)
        return self

    def with_epsilon(self, epsilon: float) -> "HagerZhangLineSearch":
        if epsilon < 0.0:
            raise self._fail("epsilon must be >= 0.0.")
        self.epsilon = float(epsilon)
        return self

    def with_theta(self, theta: float) -> "HagerZhangLineSearch":
        if theta <= 0.0:
            raise self._fail("theta must be > 0.0.")
        if theta >= 1.0:
            raise self._fail("theta must be < 1.0.")
        self.theta = float(theta)
        return self

    def with_gamma(self, gamma: float) -> "HagerZhangLineSearch":
        if gamma <= 0.0:
            raise self._fail("gamma must be > 0.0.")
        if gamma >= 1.0:
            raise self._fail("gamma must be < 1.0.")
        self.gamma = float(gamma)
        return self

    def with_eta(self, eta: float) -> "HagerZhangLineSearch":
        if eta <= 0.0:
            raise self._fail("eta must be > 0.0.")
        self.eta = float(eta)
        return self

    def with_alpha(self, alpha_min: float, alpha_max: float) -> "HagerZhangLineSearch":
        """Set the initial bracket ``[alpha_min, alpha_max]``."""
        if alpha_min < 0.0:
            raise self._fail("alpha_min must be >= 0.0.")
        if alpha_max <= alpha_min:
            raise self._fail("alpha_min must be smaller than alpha_max.")
        self.alpha_min = float(alpha_min)
        self.alpha_max = float(alpha_max)
        return self

    def with_max_bisection_iters(self, n: int) -> "HagerZhangLineSearch":
        if n < 1:
            raise self._fail("max_bisection_iters must be >= 1.")
        self.max_bisection_iters = int(n)
        return self

    # -- one dimensional view of the objective --------------------------------

    def evaluate_step(self, problem: Problem[Any], alpha: float) -> Triplet:
        """Return ``(alpha, phi(alpha), phi'(alpha))`` along the search direction."""
        param = im.scaled_add(self.init_param, alpha, self.search_direction)
        f = float(problem.cost(param))
        g = float(im.dot(self.search_direction, problem.gradient(param)))
        return alpha, f, g

    @staticmethod
    def secant(a_x: float, a_g: float, b_x: float, b_g: float) -> float:
        """Root of the line through ``(a_x, a_g)`` and ``(b_x, b_g)``.

        Falls back to the midpoint when the slopes cannot be told apart.
        """
        denom = b_g - a_g
        if not math.isfinite(denom) or abs(denom) <= EPS * max(abs(a_g), abs(b_g)):
            return 0.5 * (a_x + b_x)
        return (a_x * b_g - b_x * a_g) / denom

    def update_bracket(
        self, problem: Problem[Any], a: Triplet, b: Triplet, c: Triplet
    ) -> Tuple[Triplet, Triplet]:
        """Shrink ``[a, b]`` with the probe ``c`` keeping opposite slopes."""
        a_x, _, _ = a
        b_x, _, _ = b
        c_x, c_f, c_g = c
        threshold = self.finit + self.epsilon_k

        # U0: probe outside the bracket
        if c_x <= a_x or c_x >= b_x:
            return a, b

        # U1
        if c_g >= 0.0:
            return a, c

        # U2
        if c_f <= threshold:
            return c, b

        # U3: c has a negative slope but a cost above phi(0); bisect [a, c]
        ah = a
        bh_x = c_x
        for _ in range(self.max_bisection_iters):
            d_x = (1.0 - self.theta) * ah[0] + self.theta * bh_x
            if not ah[0] < d_x < bh_x:
                raise PotentialBug(
                    "HagerZhangLineSearch: bisection interval collapsed "
                    f"at [{ah[0]!r}, {bh_x!r}] in `update_bracket`."
                )
            d = self.evaluate_step(problem, d_x)
            self.c = d
            if d[2] >= 0.0:
                return ah, d
            if d[1] <= threshold:
                ah = d
            else:
                bh_x = d_x
        raise PotentialBug(
            "HagerZhangLineSearch: bisection in `update_bracket` did not terminate "
            f"after {self.max_bisection_iters} iterations."
        )

    def secant2(self, problem: Problem[Any], a: Triplet, b: Triplet) -> Tuple[Triplet, Triplet]:
        """Double secant step on ``[a, b]``."""
        a_x, _, a_g = a
        b_x, _, b_g = b

        c = self.evaluate_step(problem, self.secant(a_x, a_g, b_x, b_g))
        self.c = c
        aa, bb = self.update_bracket(problem, a, b, c)

        c_bar_x: Optional[float] = None
        if abs(c[0] - bb[0]) < EPS:
            c_bar_x = self.secant(b_x, b_g, bb[0], bb[2])
        elif abs(c[0] - aa[0]) < EPS:
            c_bar_x = self.secant(a_x, a_g, aa[0], aa[2])

        if c_bar_x is None:
            return aa, bb

        c_bar = self.evaluate_step(problem, c_bar_x)
        self.c = c_bar
        return self.update_bracket(problem, aa, bb, c_bar)

    def _set_best(self) -> None:
        # ties go to the earlier of a, b, c
        best = self.a
        for candidate in (self.b, self.c):
            if candidate[1] < best[1]:
                best = candidate
        self.best = best

    def _report(self, state: IterState) -> IterState:
        best_x, best_f, _ = self.best
        param = im.scaled_add(self.init_param, best_x, self.search_direction)
        return state.with_param(param).with_cost(best_f)

    # -- solver lifecycle ----------------------------------------------------

    def init(self, problem: Problem[Any], state: IterState) -> Tuple[IterState, Optional[KV]]:
        if self.sigma < self.delta:
            raise self._fail("sigma must be >= delta.")
        if self.search_direction is None:
            raise NotInitializedError(
                "HagerZhangLineSearch: Search direction not initialized. "
                "Call `set_search_direction`."
            )
        if state.param is None:
            raise NotInitializedError(
                "HagerZhangLineSearch: Initial parameter vector required. "
                "Set it with `state.with_param`."
            )

        self.init_param = state.param
        cost = state.cost
        self.finit = float(problem.cost(self.init_param)) if math.isinf(cost) else float(cost)

        grad = state.take_grad()
        self.init_grad = grad if grad is not None else problem.gradient(self.init_param)

        self.a = self.evaluate_step(problem, self.alpha_min)
        self.b = self.evaluate_step(problem, self.alpha_max)
        self.c = self.evaluate_step(problem, self.init_alpha)

        self.epsilon_k = self.epsilon * abs(self.finit)
        self.dginit = float(im.dot(self.init_grad, self.search_direction))

        self._set_best()
        logger.debug(
            "init: finit=%s dginit=%s a=%s b=%s c=%s", self.finit, self.dginit, self.a, self.b, self.c
        )
        return self._report(state), None

    def next_iter(self, problem: Problem[Any], state: IterState) -> Tuple[IterState, Optional[KV]]:
        a, b = self.a, self.b
        at, bt = self.secant2(problem, a, b)

        if bt[0] - at[0] > self.gamma * (b[0] - a[0]):
            c = self.evaluate_step(problem, 0.5 * (at[0] + bt[0]))
            self.c = c
            at, bt = self.update_bracket(problem, at, bt, c)

        self.a, self.b = at, bt
        self._set_best()
        logger.debug("bracket [%r, %r], best step %r", at[0], bt[0], self.best[0])

        kv = make_kv(alpha=self.best[0], a=at[0], b=bt[0])
        return self._report(state), kv

    def terminate(self, state: IterState) -> TerminationReason:
        best_x, best_f, best_g = self.best
        # Wolfe conditions
        if (
            best_f - self.finit <= self.delta * best_x * self.dginit
            and best_g >= self.sigma * self.dginit
        ):
            return TerminationReason.LINE_SEARCH_CONDITION_MET
        # approximate Wolfe conditions
        if (
            (2.0 * self.delta - 1.0) * self.dginit >= best_g >= self.sigma * self.dginit
            and best_f <= self.finit + self.epsilon_k
        ):
            return TerminationReason.LINE_SEARCH_CONDITION_MET
        return TerminationReason.NOT_TERMINATED


__all__ = ["HagerZhangLineSearch"]
