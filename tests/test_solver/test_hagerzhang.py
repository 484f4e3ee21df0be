import math

import numpy as np
import pytest
import torch

from iteropt import (
    ConfigurationError,
    Executor,
    FunctionObjective,
    HagerZhangLineSearch,
    NotInitializedError,
    PotentialBug,
    Problem,
    TerminationReason,
)


def square() -> FunctionObjective:
    return FunctionObjective(
        fun=lambda x: float(x[0] ** 2),
        grad=lambda x: np.array([2.0 * x[0]]),
    )


def sine() -> Problem:
    return Problem(
        FunctionObjective(
            fun=lambda x: float(np.sin(x[0])),
            grad=lambda x: np.array([np.cos(x[0])]),
        )
    )


def rosen(x: np.ndarray) -> float:
    return float((1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2)


def rosen_grad(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
            200 * (x[1] - x[0] ** 2),
        ]
    )


def run_square(solver: HagerZhangLineSearch, max_iters: int = 20):
    solver.set_search_direction(np.array([-2.0]))
    return (
        Executor(square(), solver)
        .configure(lambda s: s.with_param(np.array([1.0])).with_max_iters(max_iters))
        .run()
    )


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"delta": 0.0}, "delta must be > 0.0"),
        ({"delta": 1.0}, "delta must be < 1.0"),
        ({"sigma": 0.05}, "sigma must be >= delta"),
        ({"sigma": 1.0}, "sigma must be < 1.0"),
        ({"epsilon": -1e-3}, "epsilon must be >= 0.0"),
        ({"theta": 0.0}, "theta must be > 0.0"),
        ({"theta": 1.0}, "theta must be < 1.0"),
        ({"gamma": 0.0}, "gamma must be > 0.0"),
        ({"gamma": 1.0}, "gamma must be < 1.0"),
        ({"eta": 0.0}, "eta must be > 0.0"),
        ({"alpha_min": -1.0}, "alpha_min must be >= 0.0"),
        ({"alpha_min": 5.0, "alpha_max": 5.0}, "alpha_min must be smaller than alpha_max"),
        ({"max_bisection_iters": 0}, "max_bisection_iters must be >= 1"),
    ],
)
def test_invalid_configuration(kwargs, message):
    with pytest.raises(ConfigurationError, match=message):
        HagerZhangLineSearch(**kwargs)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        HagerZhangLineSearch().with_gamma(2.0)


def test_setters_chain_and_store_values():
    solver = HagerZhangLineSearch().with_delta(0.2).with_sigma(0.8).with_alpha(0.0, 10.0)
    assert solver.delta == 0.2
    assert solver.sigma == 0.8
    assert (solver.alpha_min, solver.alpha_max) == (0.0, 10.0)


def test_invalid_init_alpha():
    with pytest.raises(ConfigurationError):
        HagerZhangLineSearch().set_init_alpha(0.0)


def test_missing_search_direction():
    with pytest.raises(NotInitializedError, match="Search direction"):
        Executor(square(), HagerZhangLineSearch()).configure(
            lambda s: s.with_param(np.array([1.0]))
        ).run()


def test_missing_initial_param():
    solver = HagerZhangLineSearch()
    solver.set_search_direction(np.array([-2.0]))
    with pytest.raises(NotInitializedError, match="Initial parameter"):
        Executor(square(), solver).run()


def test_secant():
    assert HagerZhangLineSearch.secant(0.0, -1.0, 2.0, 1.0) == pytest.approx(1.0)
    assert HagerZhangLineSearch.secant(0.0, -3.0, 4.0, 1.0) == pytest.approx(3.0)
    # identical slopes fall back to the midpoint
    assert HagerZhangLineSearch.secant(1.0, -1.0, 3.0, -1.0) == 2.0
    assert HagerZhangLineSearch.secant(1.0, math.inf, 3.0, 1.0) == 2.0


def test_init_evaluations():
    solver = HagerZhangLineSearch()
    res = run_square(solver, max_iters=0)
    assert res.termination_reason is TerminationReason.MAX_ITERS_REACHED
    # phi(0) and the gradient at the start plus a, b and the initial step
    assert res.counts["cost_count"] == 4
    assert res.counts["gradient_count"] == 4
    assert solver.finit == 1.0
    assert solver.dginit == -4.0
    assert solver.a[0] == solver.alpha_min
    assert solver.b[0] == solver.alpha_max
    assert solver.c[0] == 1.0


def test_init_reuses_cost_and_gradient_from_state():
    solver = HagerZhangLineSearch()
    solver.set_search_direction(np.array([-2.0]))
    res = (
        Executor(square(), solver)
        .configure(
            lambda s: s.with_param(np.array([1.0]))
            .with_cost(1.0)
            .with_grad(np.array([2.0]))
            .with_max_iters(0)
        )
        .run()
    )
    assert res.counts["cost_count"] == 3
    assert res.counts["gradient_count"] == 3


def test_square_meets_line_search_condition():
    solver = HagerZhangLineSearch()
    res = run_square(solver)
    assert res.termination_reason is TerminationReason.LINE_SEARCH_CONDITION_MET
    best_x, best_f, _ = solver.best
    assert best_x > 0.0
    assert best_f < solver.finit
    assert best_x == pytest.approx(0.5)
    assert res.state.param[0] == pytest.approx(0.0, abs=1e-12)
    assert res.state.iter >= 1


def test_bracket_keeps_opposite_slopes():
    solver = HagerZhangLineSearch()
    run_square(solver)
    a_x, _, a_g = solver.a
    b_x, _, b_g = solver.b
    assert a_x < b_x
    assert a_g < 0.0 <= b_g


def test_terminate_is_idempotent():
    solver = HagerZhangLineSearch()
    res = run_square(solver)
    first = solver.terminate(res.state)
    second = solver.terminate(res.state)
    assert first is second is TerminationReason.LINE_SEARCH_CONDITION_MET


def test_best_prefers_earlier_point_on_ties():
    solver = HagerZhangLineSearch()
    solver.a = (0.1, 1.0, -1.0)
    solver.b = (0.5, 1.0, 1.0)
    solver.c = (0.3, 1.0, 0.0)
    solver._set_best()
    assert solver.best == solver.a
    solver.c = (0.3, 0.5, 0.0)
    solver._set_best()
    assert solver.best == solver.c


def _prepared_for_sine(**kwargs) -> HagerZhangLineSearch:
    solver = HagerZhangLineSearch(**kwargs).with_alpha(1e-3, 9.0)
    solver.set_search_direction(np.array([1.0]))
    solver.init_param = np.array([math.pi])
    solver.finit = math.sin(math.pi)
    solver.epsilon_k = 0.0
    return solver


def test_update_bracket_rules_without_bisection():
    solver = _prepared_for_sine()
    a = (0.0, 0.0, -1.0)
    b = (1.0, 0.5, 1.0)
    # probe outside the bracket
    assert solver.update_bracket(None, a, b, (1.5, -1.0, -1.0)) == (a, b)
    # positive slope replaces b
    c = (0.5, 2.0, 1.0)
    assert solver.update_bracket(None, a, b, c) == (a, c)
    # negative slope with small cost replaces a
    c = (0.5, -0.5, -1.0)
    assert solver.update_bracket(None, a, b, c) == (c, b)


def test_update_bracket_bisection():
    problem = sine()
    solver = _prepared_for_sine()
    a = solver.evaluate_step(problem, 1e-3)
    b = solver.evaluate_step(problem, 9.0)
    c = solver.evaluate_step(problem, 5.5)
    assert a[2] < 0.0 <= b[2]
    assert c[2] < 0.0 and c[1] > solver.finit

    new_a, new_b = solver.update_bracket(problem, a, b, c)
    assert new_a == a
    assert new_b[0] == pytest.approx(0.5 * (1e-3 + 5.5))
    assert new_b[2] >= 0.0
    assert solver.c == new_b


def test_update_bracket_bisection_cap_raises():
    problem = sine()
    solver = _prepared_for_sine(theta=0.9, max_bisection_iters=1)
    a = solver.evaluate_step(problem, 1e-3)
    b = solver.evaluate_step(problem, 9.0)
    c = solver.evaluate_step(problem, 5.5)
    with pytest.raises(PotentialBug):
        solver.update_bracket(problem, a, b, c)


def test_secant2_keeps_opposite_slopes():
    problem = sine()
    solver = _prepared_for_sine()
    a = solver.evaluate_step(problem, 1e-3)
    b = solver.evaluate_step(problem, 9.0)
    new_a, new_b = solver.secant2(problem, a, b)
    assert a[0] <= new_a[0] < new_b[0] <= b[0]
    assert new_a[2] < 0.0 <= new_b[2]


def test_rosenbrock_step_decreases_cost():
    x0 = np.array([-1.2, 1.0])
    direction = -rosen_grad(x0)
    solver = HagerZhangLineSearch()
    solver.set_search_direction(direction)
    res = (
        Executor(FunctionObjective(fun=rosen, grad=rosen_grad), solver)
        .configure(lambda s: s.with_param(x0).with_max_iters(100))
        .run()
    )
    assert res.termination_reason is TerminationReason.LINE_SEARCH_CONDITION_MET
    assert res.best_cost < rosen(x0)
    alpha = solver.best[0]
    assert 0.0 < alpha < solver.alpha_max


def test_torch_parameters():
    solver = HagerZhangLineSearch()
    solver.set_search_direction(torch.tensor([-2.0], dtype=torch.float64))
    objective = FunctionObjective(
        fun=lambda x: float((x**2).sum()),
        grad=lambda x: 2.0 * x,
    )
    res = (
        Executor(objective, solver)
        .configure(lambda s: s.with_param(torch.tensor([1.0], dtype=torch.float64)).with_max_iters(20))
        .run()
    )
    assert res.termination_reason is TerminationReason.LINE_SEARCH_CONDITION_MET
    assert isinstance(res.state.param, torch.Tensor)
    assert res.best_cost < 1.0


def test_list_parameters():
    solver = HagerZhangLineSearch()
    solver.set_search_direction([-2.0])
    objective = FunctionObjective(fun=lambda x: x[0] ** 2, grad=lambda x: [2.0 * x[0]])
    res = (
        Executor(objective, solver)
        .configure(lambda s: s.with_param([1.0]).with_max_iters(20))
        .run()
    )
    assert res.termination_reason is TerminationReason.LINE_SEARCH_CONDITION_MET
    assert isinstance(res.state.param, list)
    assert res.best_cost < 1.0


def test_solver_can_be_reused():
    solver = HagerZhangLineSearch()
    first = run_square(solver)
    second = run_square(solver)
    assert second.termination_reason is TerminationReason.LINE_SEARCH_CONDITION_MET
    assert second.counts == first.counts
    np.testing.assert_allclose(second.state.param, first.state.param)
