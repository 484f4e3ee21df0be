import math

import numpy as np
import pytest

from iteropt import IterState, Problem, TerminationReason


def test_defaults():
    state = IterState()
    assert state.param is None
    assert state.cost == math.inf
    assert state.best_cost == math.inf
    assert state.target_cost == -math.inf
    assert state.iter == 0
    assert state.termination_reason is TerminationReason.NOT_TERMINATED
    assert not state.terminated()


def test_setters_keep_previous_values():
    state = IterState().with_param(np.array([1.0])).with_cost(2.0)
    state.with_param(np.array([0.5])).with_cost(1.0)
    np.testing.assert_allclose(state.prev_param, [1.0])
    assert state.prev_cost == 2.0
    state.with_grad(1.0).with_grad(2.0)
    assert state.prev_grad == 1.0


def test_with_max_iters_rejects_negative():
    with pytest.raises(ValueError):
        IterState().with_max_iters(-1)


def test_take_grad_once():
    state = IterState().with_grad(np.array([1.0, 2.0]))
    grad = state.take_grad()
    np.testing.assert_allclose(grad, [1.0, 2.0])
    assert state.take_grad() is None
    assert state.grad is None


def test_take_param_hessian_jacobian():
    state = IterState().with_param(1.0).with_hessian(2.0).with_jacobian(3.0)
    assert state.take_param() == 1.0
    assert state.take_hessian() == 2.0
    assert state.take_jacobian() == 3.0
    assert state.param is None and state.hessian is None and state.jacobian is None


def test_update_first_param_becomes_best():
    state = IterState().with_param(3.0)
    state.update()
    assert state.best_param == 3.0
    assert state.best_cost == math.inf
    assert state.is_best()


def test_update_keeps_best_cost_non_increasing():
    state = IterState()
    best_costs = []
    for step, cost in enumerate([5.0, 3.0, 4.0, 3.0, 1.0]):
        state.with_param(float(step)).with_cost(cost)
        state.increment_iter()
        state.update()
        best_costs.append(state.best_cost)
    assert best_costs == [5.0, 3.0, 3.0, 3.0, 1.0]
    assert state.best_param == 4.0
    assert state.last_best_iter == 5
    assert state.prev_best_cost == 3.0
    assert state.prev_best_param == 1.0


def test_equal_cost_does_not_replace_best():
    state = IterState().with_param(1.0).with_cost(2.0)
    state.update()
    state.increment_iter()
    state.with_param(7.0).with_cost(2.0)
    state.update()
    assert state.best_param == 1.0
    assert not state.is_best()


def test_terminate_with_is_monotonic():
    state = IterState()
    state.terminate_with(TerminationReason.NOT_TERMINATED)
    assert not state.terminated()
    state.terminate_with(TerminationReason.MAX_ITERS_REACHED)
    state.terminate_with(TerminationReason.SOLVER_CONVERGED)
    state.terminate_with(TerminationReason.NOT_TERMINATED)
    assert state.termination_reason is TerminationReason.MAX_ITERS_REACHED


def test_func_counts_copies_problem_counters():
    class Obj:
        def cost(self, x):
            return x

    problem = Problem(Obj())
    problem.cost(1.0)
    state = IterState()
    state.func_counts(problem)
    problem.cost(1.0)
    assert state.counts["cost_count"] == 1
