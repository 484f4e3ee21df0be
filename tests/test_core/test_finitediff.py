import numpy as np
import pytest
import torch

from iteropt import FunctionObjective, approx_grad, approx_hessian


def rosen(x: np.ndarray) -> float:
    return float((1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2)


def rosen_grad(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
            200 * (x[1] - x[0] ** 2),
        ]
    )


def test_approx_grad_matches_analytic():
    x = np.array([-1.2, 1.0])
    np.testing.assert_allclose(approx_grad(rosen, x), rosen_grad(x), rtol=1e-5)


def test_approx_hessian_quadratic():
    a = np.array([[3.0, 1.0], [1.0, 2.0]])

    def fun(x):
        return float(0.5 * x @ a @ x)

    np.testing.assert_allclose(approx_hessian(fun, np.array([0.3, -0.7])), a, atol=1e-4)


def test_eps_must_be_positive():
    with pytest.raises(ValueError):
        approx_grad(rosen, np.zeros(2), eps=0.0)
    with pytest.raises(ValueError):
        approx_hessian(rosen, np.zeros(2), eps=-1.0)


def test_function_objective_prefers_analytic_gradient():
    calls = []

    def grad(x):
        calls.append(x)
        return rosen_grad(x)

    objective = FunctionObjective(fun=rosen, grad=grad)
    x = np.array([0.5, 0.5])
    np.testing.assert_allclose(objective.gradient(x), rosen_grad(x))
    assert len(calls) == 1
    assert objective.cost(x) == rosen(x)


def test_function_objective_falls_back_to_finite_differences():
    objective = FunctionObjective(fun=rosen)
    x = np.array([0.5, 0.5])
    np.testing.assert_allclose(objective.gradient(x), rosen_grad(x), rtol=1e-5)
    assert objective.hessian(x).shape == (2, 2)


def test_results_keep_parameter_container():
    def fun(x):
        return float(x[0] ** 2 + 3.0 * x[1])

    grad = approx_grad(fun, [1.0, 2.0])
    assert isinstance(grad, list)
    assert grad == pytest.approx([2.0, 3.0], rel=1e-6)

    tgrad = approx_grad(fun, torch.tensor([1.0, 2.0], dtype=torch.float64))
    assert isinstance(tgrad, torch.Tensor)
    assert tgrad.dtype == torch.float64
    assert torch.allclose(tgrad, torch.tensor([2.0, 3.0], dtype=torch.float64), rtol=1e-6)

    hess = approx_hessian(fun, [1.0, 2.0])
    assert isinstance(hess, list)
    np.testing.assert_allclose(np.array(hess), [[2.0, 0.0], [0.0, 0.0]], atol=1e-4)
